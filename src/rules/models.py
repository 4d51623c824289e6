from pydantic import BaseModel, Field

from src.components.emission import EmissionConfig, TargetSyntax
from src.components.identifiers import IdentifierConfig
from src.components.resolver import ResolverConfig
from src.core.entities import BASE_VARIANT, Category


class ProjectRules(BaseModel):
    slug: str
    bundle_id: str = Field(min_length=1)

class IdentifierRules(BaseModel):
    category_prefixes: dict[Category, str] = Field(
        default_factory=lambda: {Category.COLOR: "ColorName", Category.IMAGE: "ImageName"}
    )
    strip_accessor_suffix: bool = True

    def to_config(self) -> IdentifierConfig:
        return IdentifierConfig(
            category_prefixes=dict(self.category_prefixes),
            strip_accessor_suffix=self.strip_accessor_suffix,
        )

class EmissionRules(BaseModel):
    target: TargetSyntax = TargetSyntax.PYTHON
    output_path: str | None = None
    namespace_prefix: str = "AC"
    swift_framework_extensions: bool = False

    def to_config(self) -> EmissionConfig:
        return EmissionConfig(
            namespace_prefix=self.namespace_prefix,
            swift_framework_extensions=self.swift_framework_extensions,
        )

class ResolverRules(BaseModel):
    fallback_variant: str | None = BASE_VARIANT
    validate_bundle: bool = True
    strict_validation: bool = False
    cache_handles: bool = False

    def to_config(self) -> ResolverConfig:
        return ResolverConfig(
            fallback_variant=self.fallback_variant,
            validate_bundle=self.validate_bundle,
            strict_validation=self.strict_validation,
            cache_handles=self.cache_handles,
        )

class Rules(BaseModel):
    project: ProjectRules
    identifiers: IdentifierRules = Field(default_factory=IdentifierRules)
    emission: EmissionRules = Field(default_factory=EmissionRules)
    resolver: ResolverRules = Field(default_factory=ResolverRules)
    # bundle_id -> asset catalog directory
    catalogs: dict[str, str] = Field(default_factory=dict)
