# site_crawler/__init__.py
"""
SiteCrawler package initializer.
Defines package version.
"""
__version__ = "0.1.0"
