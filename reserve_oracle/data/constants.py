"""Asset identifiers and protocol constants."""

# Asset symbols
ETH = "ETH"
USDC = "USDC"
DAI = "DAI"
LINK = "LINK"

# Internal representation of the chain's native asset
NATIVE_ASSET_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

MAINNET_ADDRESSES: dict[str, str] = {
    ETH: NATIVE_ASSET_ADDRESS,
    USDC: "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
    DAI: "0x6B175474E89094C44Da98b954EedeAC495271d0F",
    LINK: "0x514910771AF9Ca656af840dff83E8264EcF986CA",
}

# Wad (1e18) for balances, Ray (1e27) for rates and indices
WAD = 10**18
HALF_WAD = WAD // 2
RAY = 10**27
HALF_RAY = RAY // 2
WAD_RAY_RATIO = 10**9

MAX_UINT256 = 2**256 - 1

# "Whole balance" sentinel for repay and redeem
MAX_UINT_AMOUNT = MAX_UINT256

# The ledger accrues over a 365-day year
SECONDS_PER_YEAR = 365 * 24 * 3600

# Origination fee charged on every borrow, in basis points (0.25%)
ORIGINATION_FEE_BPS = 25
BPS_DENOMINATOR = 10_000
