"""
Workspace Hub REST API
"""
