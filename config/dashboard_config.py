

class DashboardConfig:
    DEFAULT_PERIOD = "30d"
    DEFAULT_INTERVAL = "daily"
    # Stellar amounts carry 7 implied decimal digits
    STROOP_DECIMALS = 7
    PLACEHOLDER = "N/A"
