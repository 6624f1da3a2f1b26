"""Storefront test suite"""
