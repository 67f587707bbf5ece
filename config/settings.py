from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Identities (compared by equality; no wallet/session layer)
    OWNER_ID: str = "owner"
    RESOLVER_ID: str = "resolver"

    # AMM parameters: all amounts in settlement-asset base units
    TRADE_FEE_BPS: int = 200  # 2%
    MAX_TRADE_FEE_BPS: int = 500  # 5% hard ceiling for the fee setter
    MIN_LIQUIDITY: int = 100
    MAX_RESOLUTION_HORIZON_DAYS: int = 365

    # App
    APP_NAME: str = "Binary Prediction Market"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"


settings = Settings()
