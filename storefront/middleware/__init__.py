"""HTTP middleware: sessions, security headers, sanitization and rate limiting"""
