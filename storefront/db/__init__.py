"""Database utilities and seed data"""
