from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    CALENDAR_PROVIDER: str = "google"
    GOOGLE_CALENDAR_BASE_URL: str = "https://www.googleapis.com/calendar/v3"
    GOOGLE_CALENDAR_ID: str = "primary"

    BOOKING_STORE_PROVIDER: str = "json"
    BOOKING_STORE_PATH: str = "./data/bookings.jsonl"

    PHONEPE_MERCHANT_ID: str = "PGTESTPAYUAT"
    PHONEPE_MERCHANT_KEY: str | None = None
    PHONEPE_KEY_INDEX: int = 1
    PHONEPE_BASE_URL: str = "https://api-preprod.phonepe.com/apis/pg-sandbox"
    PHONEPE_REDIRECT_URL: str = "http://localhost:5003/api/payment/status"
    PHONEPE_SUCCESS_URL: str = "http://localhost:3000/payment/success"
    PHONEPE_FAILURE_URL: str = "http://localhost:3000/payment/failure"


settings = Settings()
