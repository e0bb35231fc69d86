"""External data providers (RPC, token list)"""
