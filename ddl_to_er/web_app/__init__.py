"""
Flask JSON API for the converter
"""
