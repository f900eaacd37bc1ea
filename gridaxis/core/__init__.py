"""
gridaxis developer API
"""
