"""Package record models supplied to the graph builder."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Reserved node key of the synthetic application node
ROOT_PACKAGE_NAME = "."
NAMESPACE_SEPARATOR = "/"


class PackageRecord(BaseModel):
    """A single package with its outgoing relationships."""
    name: str
    color: str | None = None
    path: str | None = None  # Package directory, absolute or root-relative
    dependencies: set[str] = Field(default_factory=set)
    deprecated_references: set[str] = Field(alias="deprecatedReferences", default_factory=set)
    package_todos: set[str] = Field(alias="packageTodos", default_factory=set)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError("package name must not be empty")
        if v == ROOT_PACKAGE_NAME:
            raise ValueError(f"package name '{ROOT_PACKAGE_NAME}' is reserved for the application node")
        if any(not segment for segment in v.split(NAMESPACE_SEPARATOR)):
            raise ValueError(f"package name '{v}' contains an empty namespace segment")
        return v


class PackageManifest(BaseModel):
    """Ordered collection of package records."""
    packages: list[PackageRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_unique_names(self):
        seen = set()
        duplicates = []
        for package in self.packages:
            if package.name in seen:
                duplicates.append(package.name)
            seen.add(package.name)
        if duplicates:
            raise ValueError(f"duplicate package names: {', '.join(sorted(set(duplicates)))}")
        return self

    @property
    def names(self) -> list[str]:
        return [package.name for package in self.packages]
