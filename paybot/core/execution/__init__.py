"""
Call data encoding for the transactions the bot proposes.

Usage:
    from paybot.core.execution import ERC20_ABI, encode_function_data

    data = encode_function_data(ERC20_ABI, "transfer", [recipient, amount])
"""

from .abi import (
    ERC20_ABI,
    AbiError,
    decode_function_result,
    encode_function_data,
    function_selector,
    function_signature,
)

__all__ = [
    "ERC20_ABI",
    "AbiError",
    "decode_function_result",
    "encode_function_data",
    "function_selector",
    "function_signature",
]
