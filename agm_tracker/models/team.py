"""
担当チームモデル
タスク・議題から弱参照される責任主体
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .base import DEFAULT_COLOR_TAG, clean_dict


@dataclass(frozen=True)
class Team:
    """担当チームクラス"""

    id: str
    name: str
    color_tag: str = DEFAULT_COLOR_TAG
    description: Optional[str] = None

    @classmethod
    def create(cls, name: str, description: str = "",
               color_tag: str = DEFAULT_COLOR_TAG) -> 'Team':
        """
        表示名とは独立したIDでチームを作成

        Args:
            name: チーム名
            description: 説明
            color_tag: 表示用カラータグ

        Returns:
            作成されたチーム
        """
        return cls(
            id=f"TEAM_{uuid.uuid4().hex[:8].upper()}",
            name=name.strip(),
            color_tag=color_tag or DEFAULT_COLOR_TAG,
            description=description or "",
        )

    def get_validation_errors(self) -> List[str]:
        """妥当性検証エラーの一覧を取得"""
        errors = []
        if not self.id or not self.id.strip():
            errors.append("チームIDが空です")
        if not self.name or not self.name.strip():
            errors.append("チーム名が空です")
        return errors

    def validate(self) -> bool:
        """妥当性検証"""
        return not self.get_validation_errors()

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return clean_dict({
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'colorTag': self.color_tag,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        """辞書から復元"""
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            color_tag=data.get('colorTag', data.get('color', DEFAULT_COLOR_TAG)),
            description=data.get('description'),
        )


def find_team(teams: Iterable[Team], team_id: str) -> Optional[Team]:
    """
    IDでチームを検索

    Args:
        teams: チーム一覧
        team_id: チームID

    Returns:
        該当チーム（削除済み・未登録の場合はNone）
    """
    for team in teams:
        if team.id == team_id:
            return team
    return None


def team_display_name(teams: Iterable[Team], team_id: str) -> str:
    """チーム表示名を取得（見つからない場合はIDをそのまま返す）"""
    team = find_team(teams, team_id)
    return team.name if team else team_id
