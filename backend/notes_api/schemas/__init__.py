"""
请求 / 响应 Schema
"""
