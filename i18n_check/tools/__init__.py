"""
Tools module for i18n-check
===========================
"""
