from dataclasses import dataclass


@dataclass
class Category:
    id: str
    name: str  # mutable through the edit category webhook
