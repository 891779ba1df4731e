"""
笔记 API 后端
"""
