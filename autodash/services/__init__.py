"""
Application services: per-user data sessions, mock auth and file storage.
"""
