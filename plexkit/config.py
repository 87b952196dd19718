from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    solana_rpc: str = "https://api.mainnet-beta.solana.com"
    helius_rpc_url: str = ""
    commitment: str = "confirmed"
    rpc_timeout: float = 10
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def rpc_url(self) -> str:
        # Prefer Helius RPC if provided to improve reliability.
        return self.helius_rpc_url or self.solana_rpc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
