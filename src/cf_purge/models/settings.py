import dotenv
from pydantic.v1 import BaseSettings


class EnvSettings(BaseSettings):
    # cloudflare client api
    api_url: str = "https://www.cloudflare.com/api_json.html"

    # fallback zone for sites without a cloudflare_zone setting
    zone: str = "example.com"

    # purge dispatch
    max_workers: int = 4

    # logging
    log_level: str = "INFO"

    # debug
    verbose: bool = False

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.verbose else self.log_level.upper()

    class Config:
        env_file = dotenv.find_dotenv(usecwd=True)
        env_prefix = "cf_purge_"


env = EnvSettings()
