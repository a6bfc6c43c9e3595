"""TV Tracker recommendation service"""
