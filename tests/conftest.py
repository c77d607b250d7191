import pytest

from feeledger import FeeToken

FEE = 5000  # 0.5%
FEE_THRESHOLD = 500 * 10**18
TOTAL_SUPPLY = 375_000_000 * 10**18
ZERO = "0x" + "00" * 20


def make_address(n: int) -> str:
    return "0x" + f"{n:040x}"


OWNER = make_address(0xA1)
RECIPIENT = make_address(0xB2)
ANOTHER = make_address(0xC3)
BENEFICIARY = make_address(0xD4)
NEW_BENEFICIARY = make_address(0xE5)


@pytest.fixture
def token() -> FeeToken:
    """Freshly deployed token with fees disabled."""
    return FeeToken(FEE, BENEFICIARY, FEE_THRESHOLD, deployer=OWNER)


@pytest.fixture
def fee_token(token: FeeToken) -> FeeToken:
    """Token with fees enabled."""
    token.enable_fees(OWNER)
    return token


def snapshot(token: FeeToken, *accounts: str) -> dict:
    """Capture every observable piece of ledger state for rejection checks."""
    return {
        "balances": {a: token.balance_of(a) for a in accounts},
        "allowances": {(a, b): token.allowance(a, b) for a in accounts for b in accounts},
        "fee": token.fee,
        "fee_beneficiary": token.fee_beneficiary,
        "fee_threshold": token.fee_threshold,
        "fees_enabled": token.fees_enabled,
        "paused": token.paused,
        "owner": token.owner,
        "events": len(token.events),
    }
