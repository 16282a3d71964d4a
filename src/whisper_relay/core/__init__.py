"""
核心层：错误定义、状态聚合、合约门面与依赖注入。
"""
