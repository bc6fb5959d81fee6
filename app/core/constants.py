"""
Application-wide constants
"""

SERVICE_NAME = "workforce-ops-backend"
SYSTEM_CREDIT = "Workforce Ops - cleaning & site services operations"
