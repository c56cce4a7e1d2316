# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from dataclasses import dataclass, field
from typing import TypeVar

from sqlalchemy import (
    and_,
    ColumnElement,
    Delete,
    desc,
    Select,
    Update,
)


@dataclass
class OrderByClause:
    column: ColumnElement

    def __eq__(self, other) -> bool:
        return self.column.compare(other.column)


@dataclass
class Clause:
    condition: ColumnElement

    def __eq__(self, other):
        """Useful for tests"""
        if not isinstance(other, type(self)):
            return False
        return self.condition.compare(other.condition)


SUD = TypeVar("SUD", Select, Update, Delete)


@dataclass
class QuerySpec:
    """
    Contains the query specification to be executed.
    """

    where: Clause | None = None
    # order_by can't be a single clause as SQLAlchemy requires the order_by args to be a list
    order_by: list[OrderByClause] = field(default_factory=list)

    def enrich_stmt(self, stmt: SUD) -> SUD:
        """Enrich the SQL statement by adding the clauses (if present) in the object.

        The where condition is added to all kind of statements, so applying a
        QuerySpec to a statement is always `stmt = query.enrich_stmt(stmt)`.
        The order_by, instead, will only be applied to select statements and
        replaces any ordering already present.

        Params:
            stmt: the SQL statement to enrich
        Returns:
            The original statement (possibly) enriched with the clauses.
        """
        if self.where:
            stmt = stmt.where(self.where.condition)

        if self.order_by and isinstance(stmt, Select):
            stmt = stmt.order_by(None).order_by(
                *[clause.column for clause in self.order_by]
            )

        return stmt


class ClauseFactory:
    @classmethod
    def and_clauses(cls, clauses: list[Clause]) -> Clause:
        return Clause(condition=and_(*[clause.condition for clause in clauses]))


class OrderByClauseFactory:
    @staticmethod
    def desc_clause(clause: OrderByClause) -> OrderByClause:
        clause.column = desc(clause.column)
        return clause
