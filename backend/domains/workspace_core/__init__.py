"""
Workspace Core - 工作台基础设施

- logging: 基于 structlog 的结构化日志
- storage: 键值存储后端与持久化网关
- base: 实体存储基类
- llm: LLM 客户端

注意: 通用应用基础设施（异常、生命周期）在 domains.core 模块中。
"""
