import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="PIX_", extra="ignore")

    server_mode: str = "stdio"
    host: str = "0.0.0.0"
    port: int = 3000

    # Comma-separated, tried in order: "static", "efi"
    providers: str = "static"

    static_expiration_days: int = 30

    efi_client_id: str = ""
    efi_client_secret: str = ""
    efi_sandbox: bool = False
    efi_pix_key: str = ""
    efi_certificate_path: str = ""
    efi_timeout: float = 30.0
    efi_charge_expiration: int = 3600  # 1 hour in seconds

    qr_box_size: int = 10
    qr_border: int = 2

    log_level: str = "INFO"
    log_json: bool = False

    @property
    def provider_names(self) -> list[str]:
        return [name.strip().lower() for name in self.providers.split(",") if name.strip()]

    @property
    def environment(self) -> str:
        return "sandbox" if self.efi_sandbox else "production"

    def efi_configured(self) -> bool:
        if not self.efi_client_id or not self.efi_client_secret:
            logger.warning(
                "PIX_EFI_CLIENT_ID / PIX_EFI_CLIENT_SECRET are not set; "
                "the Efí provider will fail every credential exchange."
            )
            return False
        return True


settings = Settings()
