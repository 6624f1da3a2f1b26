"""Cart endpoints"""
