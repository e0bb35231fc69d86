from paybot.services.address import (
    is_valid_evm_address,
    looks_like_evm_address,
    same_address,
)

USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"


def test_lowercase_and_uppercase_hex_are_valid():
    assert is_valid_evm_address(USDC.lower()) is True
    assert is_valid_evm_address("0x" + USDC[2:].upper()) is True


def test_checksummed_address_is_valid():
    assert is_valid_evm_address(USDC) is True


def test_bad_checksum_is_invalid_but_looks_like_an_address():
    bad = "0xAbCdEfAbCdEfAbCdEfAbCdEfAbCdEfAbCdEfAbCd"
    assert looks_like_evm_address(bad) is True
    assert is_valid_evm_address(bad) is False


def test_single_flipped_case_breaks_checksum():
    # USDC with the first letter's case flipped
    typo = USDC.replace("fCD6", "FCD6", 1)
    assert looks_like_evm_address(typo) is True
    assert is_valid_evm_address(typo) is False


def test_malformed_values():
    assert is_valid_evm_address(USDC[:-1]) is False
    assert is_valid_evm_address(USDC[2:]) is False
    assert is_valid_evm_address("0X" + USDC[2:].lower()) is False
    assert is_valid_evm_address(None) is False
    assert is_valid_evm_address(12345) is False


def test_compare_ignores_case():
    assert same_address(USDC, USDC.lower()) is True
    assert same_address(USDC, "0x" + "1" * 40) is False
