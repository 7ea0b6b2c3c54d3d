"""
Person Domain

テーブルに格納されるキー付きレコード (id, cpf, nome)。
"""
from src.domain.person.entities import Person, PersonImageError, changed_attributes

__all__ = ["Person", "PersonImageError", "changed_attributes"]
