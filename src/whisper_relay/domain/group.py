"""
群聊元数据
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GroupChat:
    """创建后不可变；成员关系不在链上维护。"""

    group_id: str
    creator: str
    created_at: int
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group_id": self.group_id,
            "creator": self.creator,
            "created_at": self.created_at,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroupChat":
        return cls(
            group_id=data["group_id"],
            creator=data["creator"],
            created_at=int(data["created_at"]),
            name=data.get("name"),
        )
