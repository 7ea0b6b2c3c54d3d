"""Person Entity"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# テーブルのキー属性
PARTITION_KEY = "id"
SORT_KEY = "cpf"
# GSI "secundary" のソートキー
NAME_ATTRIBUTE = "nome"

KEY_ATTRIBUTES = (PARTITION_KEY, SORT_KEY)


class PersonImageError(ValueError):
    """ストリームイメージから Person を復元できないエラー"""

    pass


@dataclass(frozen=True)
class Person:
    """
    テーブルに格納されるキー付きレコード

    - 主アクセスパス: (id, cpf)
    - 副アクセスパス: GSI "secundary" (cpf, nome)

    キー以外の属性は attributes にそのまま保持する。
    """

    id: str
    cpf: str
    nome: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_image(cls, image: dict[str, Any]) -> "Person":
        """デシリアライズ済みのストリームイメージから生成"""
        missing = [name for name in KEY_ATTRIBUTES if not image.get(name)]
        if missing:
            raise PersonImageError(
                f"Image is missing key attribute(s): {', '.join(missing)}"
            )

        extra = {
            name: value
            for name, value in image.items()
            if name not in (PARTITION_KEY, SORT_KEY, NAME_ATTRIBUTE)
        }
        nome = image.get(NAME_ATTRIBUTE)
        return cls(
            id=str(image[PARTITION_KEY]),
            cpf=str(image[SORT_KEY]),
            nome=None if nome is None else str(nome),
            attributes=extra,
        )

    @property
    def key(self) -> dict[str, str]:
        return {PARTITION_KEY: self.id, SORT_KEY: self.cpf}

    def to_item(self) -> dict[str, Any]:
        item: dict[str, Any] = {**self.attributes, **self.key}
        if self.nome is not None:
            item[NAME_ATTRIBUTE] = self.nome
        return item


def changed_attributes(old: Person, new: Person) -> list[str]:
    """更新前後で値が変わった属性名 (ソート済み)"""
    old_item = old.to_item()
    new_item = new.to_item()
    names = set(old_item) | set(new_item)
    return sorted(name for name in names if old_item.get(name) != new_item.get(name))
