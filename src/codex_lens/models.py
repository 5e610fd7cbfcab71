from pydantic import BaseModel, computed_field

EXTERNAL_PREFIX = "external:"


def is_external(token: str) -> bool:
    return token.startswith(EXTERNAL_PREFIX)


class DependencyReport(BaseModel):
    file_path: str
    language: str
    dependencies: list[str]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def external(self) -> list[str]:
        return [token.removeprefix(EXTERNAL_PREFIX) for token in self.dependencies if is_external(token)]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def relative(self) -> list[str]:
        return [token for token in self.dependencies if not is_external(token)]


class CompressionStats(BaseModel):
    language: str
    original_length: int
    compressed_length: int
    comments_removed: int = 0
    docstrings_removed: int = 0

    @property
    def reduction_percent(self) -> int:
        if self.original_length == 0:
            return 0
        return round((self.original_length - self.compressed_length) / self.original_length * 100)
