"""
Minimal ABI codec for the ERC-20 calls the payment flow makes.

Encodes call data for static argument types (address, uintN, bool) and decodes
single return values (address, uintN, bool, string).
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from eth_utils import keccak, to_checksum_address

AbiFragment = Dict[str, Any]

ERC20_ABI: List[AbiFragment] = [
    {
        "type": "function",
        "name": "decimals",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "type": "function",
        "name": "symbol",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
]

WORD_HEX_LEN = 64


class AbiError(ValueError):
    """Raised when a value cannot be encoded or decoded."""
    pass


def _strip_0x(value: str) -> str:
    return value[2:] if value.startswith(("0x", "0X")) else value


def _uint_bits(abi_type: str) -> int:
    bits = int(abi_type[4:] or 256)
    if bits % 8 or not 8 <= bits <= 256:
        raise AbiError(f"Unsupported integer type: {abi_type}")
    return bits


def _encode_uint(value: int, bits: int = 256) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AbiError(f"Expected an integer, got {value!r}")
    if value < 0 or value >= 2**bits:
        raise AbiError(f"Value out of range for uint{bits}: {value}")
    return format(value, "064x")


def _encode_address(address: str) -> str:
    addr = _strip_0x(address).lower()
    if len(addr) != 40:
        raise AbiError(f"Invalid address length: {address}")
    try:
        int(addr, 16)
    except ValueError as exc:
        raise AbiError(f"Invalid address: {address}") from exc
    return addr.rjust(WORD_HEX_LEN, "0")


def _encode_value(abi_type: str, value: Any) -> str:
    if abi_type == "address":
        return _encode_address(value)
    if abi_type.startswith("uint"):
        return _encode_uint(value, _uint_bits(abi_type))
    if abi_type == "bool":
        return _encode_uint(1 if value else 0)
    raise AbiError(f"Unsupported argument type: {abi_type}")


def find_function(abi: Sequence[AbiFragment], function_name: str) -> AbiFragment:
    for fragment in abi:
        if fragment.get("type", "function") == "function" and fragment.get("name") == function_name:
            return fragment
    raise AbiError(f"Function {function_name!r} not found in ABI")


def function_signature(fragment: AbiFragment) -> str:
    """``transfer(address,uint256)`` style canonical signature."""
    arg_types = ",".join(arg["type"] for arg in fragment.get("inputs", []))
    return f"{fragment['name']}({arg_types})"


def function_selector(signature: str) -> str:
    return "0x" + keccak(text=signature)[:4].hex()


def encode_function_data(
    abi: Sequence[AbiFragment],
    function_name: str,
    args: Sequence[Any] = (),
) -> str:
    """Build ``0x``-prefixed call data for ``function_name(*args)``."""
    fragment = find_function(abi, function_name)
    inputs = fragment.get("inputs", [])
    if len(inputs) != len(args):
        raise AbiError(
            f"{function_name} expects {len(inputs)} arguments, got {len(args)}"
        )

    head = "".join(_encode_value(arg["type"], value) for arg, value in zip(inputs, args))
    return function_selector(function_signature(fragment)) + head


def _word(data: str, index: int) -> str:
    start = index * WORD_HEX_LEN
    word = data[start:start + WORD_HEX_LEN]
    if len(word) != WORD_HEX_LEN:
        raise AbiError("Return data too short")
    return word


def _decode_string(data: str, offset_word: str) -> str:
    offset = int(offset_word, 16)
    if offset % 32:
        raise AbiError("Misaligned string offset")
    length = int(_word(data, offset // 32), 16)
    start = offset * 2 + WORD_HEX_LEN
    payload = data[start:start + length * 2]
    if len(payload) != length * 2:
        raise AbiError("String payload truncated")
    try:
        return bytes.fromhex(payload).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise AbiError("String is not valid UTF-8") from exc


def _decode_value(abi_type: str, data: str, index: int) -> Any:
    word = _word(data, index)
    if abi_type.startswith("uint"):
        value = int(word, 16)
        if value >= 2 ** _uint_bits(abi_type):
            raise AbiError(f"Value out of range for {abi_type}")
        return value
    if abi_type == "bool":
        value = int(word, 16)
        if value not in (0, 1):
            raise AbiError("Invalid bool encoding")
        return bool(value)
    if abi_type == "address":
        return to_checksum_address("0x" + word[-40:])
    if abi_type == "string":
        return _decode_string(data, word)
    raise AbiError(f"Unsupported return type: {abi_type}")


def decode_function_result(
    abi: Sequence[AbiFragment],
    function_name: str,
    result: str,
) -> Any:
    """Decode ``eth_call`` output. Single outputs are returned unwrapped."""
    fragment = find_function(abi, function_name)
    outputs = fragment.get("outputs", [])
    data = _strip_0x(result or "")
    if not data and outputs:
        raise AbiError(f"{function_name} returned no data")

    values = [_decode_value(out["type"], data, i) for i, out in enumerate(outputs)]
    if len(values) == 1:
        return values[0]
    return tuple(values)


__all__ = [
    "ERC20_ABI",
    "AbiError",
    "AbiFragment",
    "find_function",
    "function_signature",
    "function_selector",
    "encode_function_data",
    "decode_function_result",
]
