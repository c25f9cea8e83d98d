"""
核心模块包 (Core Module Package)

CloudHost 后端的基础组件，包含配置管理、数据库连接、令牌认证、异常处理、按键加锁和依赖注入。

Foundational components for the CloudHost backend, including configuration management,
database connections, token authentication, exception handling, per-key locking, and dependency injection.
"""
