"""
API 路由包 (API Routers)

每个模块对应一组 /api/v1 接口，由 cloudhost.main 统一注册。
"""
