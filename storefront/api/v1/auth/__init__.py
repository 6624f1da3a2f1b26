"""Authentication endpoints"""
