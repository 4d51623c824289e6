from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.entities import BASE_VARIANT, Category


class ManifestResource(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    category: Category = Category.COLOR
    variants: list[str] = Field(default_factory=lambda: [BASE_VARIANT], min_length=1)
    public: bool = False

    @field_validator("variants")
    @classmethod
    def variants_unique(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError(f"variant tags must be unique, got {v}")
        return v


class Manifest(BaseModel):
    bundle_id: str | None = None
    resources: list[ManifestResource] = Field(default_factory=list)
