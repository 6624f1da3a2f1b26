"""Configuration, persistence, security and session plumbing"""
