"""Move call description submitted by the test client."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class MoveCall:
    """
    A single Move entry-function call.

    target is `<package>::<module>::<function>`; arguments are passed to
    unsafe_moveCall as JSON values (object ids as 0x strings).
    """

    target: str
    arguments: list[Any] = field(default_factory=list)
    type_arguments: list[str] = field(default_factory=list)

    @property
    def parts(self) -> tuple[str, str, str]:
        package, module, function = self.target.split("::")
        return package, module, function

    @classmethod
    def of(cls, package_id: str, module: str, function: str, *arguments: Any) -> "MoveCall":
        return cls(target=f"{package_id}::{module}::{function}", arguments=list(arguments))

    def __post_init__(self):
        if self.target.count("::") != 2:
            raise ValueError(f"Move call target must be package::module::function: {self.target}")
