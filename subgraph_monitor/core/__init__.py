"""
Core utilities — shared exception types used across the poller, clients and API.
"""
