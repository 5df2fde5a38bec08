# select_sdk/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SelectSDKSettings(BaseSettings):
    ADMIN_NAMESPACE: str = "admin"
    DEFAULT_COLLECTION_NAME: str = "all"
    # all -> all_options, active -> active_options
    COLLECTION_ACTION_SUFFIX: str = "_options"
    INPUT_CSS_CLASS: str = "searchable-select-input"
    AJAX_URL_ATTRIBUTE: str = "data-ajax-url"
    STRICT_AJAX_OPTIONS: bool = Field(
        False,
        description="Отклонять неизвестные ключи в опции ajax вместо их игнорирования.",
    )
    LOGGING_LEVEL: str = Field(
        "INFO",
        json_schema_extra={"examples": ["DEBUG", "INFO", "WARNING", "ERROR"]},
    )

    model_config = SettingsConfigDict(
        env_prefix="SELECT_SDK_",
        extra="ignore",
    )


settings = SelectSDKSettings()
