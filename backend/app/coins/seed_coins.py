"""Seed listings and parameters for the offline coin catalog simulator."""

# Well-known coins placed at the top of the synthetic catalog
# (id, symbol, name, approximate price in USD)
SEED_COINS: list[tuple[str, str, str, float]] = [
    ("bitcoin", "btc", "Bitcoin", 67000.00),
    ("ethereum", "eth", "Ethereum", 3500.00),
    ("tether", "usdt", "Tether", 1.00),
    ("binancecoin", "bnb", "BNB", 580.00),
    ("solana", "sol", "Solana", 150.00),
    ("usd-coin", "usdc", "USDC", 1.00),
    ("ripple", "xrp", "XRP", 0.52),
    ("dogecoin", "doge", "Dogecoin", 0.15),
    ("cardano", "ada", "Cardano", 0.45),
    ("avalanche-2", "avax", "Avalanche", 35.00),
]

# Lognormal parameters for synthetic market caps (natural log of USD)
MARKET_CAP_LOG_MEAN = 19.0  # ~180M USD median
MARKET_CAP_LOG_SIGMA = 2.0

# Lognormal parameters for synthetic prices
PRICE_LOG_MEAN = 0.0  # ~1 USD median
PRICE_LOG_SIGMA = 2.5

# Share of market cap traded in 24h
VOLUME_RATIO_LOW = 0.01
VOLUME_RATIO_HIGH = 0.25

# Standard deviation of the 24h percentage change
CHANGE_24H_SIGMA = 4.0
