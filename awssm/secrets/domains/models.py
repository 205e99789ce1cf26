"""Domain models for secret management."""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .errors import SecretParseError


@dataclass(frozen=True)
class Secret:
    """A secret as returned by the aws secretsmanager commands."""
    arn: str
    name: str
    description: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Secret":
        """
        Build a Secret from an AWS response item.

        Args:
            data: Mapping with ARN, Name and optionally Description and SecretString

        Raises:
            SecretParseError: If the item is not a mapping or lacks ARN or Name
        """
        if not isinstance(data, dict):
            raise SecretParseError(f"Expected a secret object, got: {data!r}")
        try:
            return cls(
                arn=data["ARN"],
                name=data["Name"],
                description=data.get("Description"),
                value=data.get("SecretString"),
            )
        except KeyError as e:
            raise SecretParseError(f"Secret is missing required field {e}")


@dataclass
class SecretList:
    """Ordered secrets, in the order the aws command returned them."""
    secrets: List[Secret] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SecretList":
        """Build a SecretList from a list-secrets response."""
        if not isinstance(data, dict) or "SecretList" not in data:
            raise SecretParseError("Response has no 'SecretList' field")
        return cls([Secret.from_dict(item) for item in data["SecretList"]])

    def filter_by_name(self, query: str) -> "SecretList":
        """Return the secrets whose name contains query, ignoring case."""
        needle = query.lower()
        return SecretList([s for s in self.secrets if needle in s.name.lower()])

    @property
    def names(self) -> List[str]:
        return [s.name for s in self.secrets]

    def __len__(self) -> int:
        return len(self.secrets)

    def __iter__(self) -> Iterator[Secret]:
        return iter(self.secrets)

    def __getitem__(self, index: int) -> Secret:
        return self.secrets[index]
