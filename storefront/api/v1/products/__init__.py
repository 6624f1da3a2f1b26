"""Catalog endpoints"""
