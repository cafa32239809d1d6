"""
Authentication and session gate
"""
