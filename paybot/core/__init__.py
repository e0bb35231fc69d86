"""Core payment and execution logic"""
