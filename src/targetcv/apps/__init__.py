"""命令行入口（只做参数解析 + 调用库 + 退出码映射）。"""
