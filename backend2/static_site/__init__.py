"""
静态站点（Backend2）
"""
