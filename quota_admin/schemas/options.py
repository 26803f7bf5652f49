from pydantic import BaseModel, ConfigDict, Field

REGEX_PREFIX = "regex:"


class SensitiveWordSettings(BaseModel):
    """The option keys owned by the sensitive-word settings panel."""

    model_config = ConfigDict(populate_by_name=True)

    check_sensitive_enabled: bool = Field(default=False, alias="CheckSensitiveEnabled")
    check_sensitive_on_prompt_enabled: bool = Field(default=False, alias="CheckSensitiveOnPromptEnabled")
    sensitive_words: str = Field(default="", alias="SensitiveWords")

    @classmethod
    def option_keys(cls) -> list[str]:
        return [field.alias for field in cls.model_fields.values()]

    def to_options(self) -> dict:
        return self.model_dump(by_alias=True)
