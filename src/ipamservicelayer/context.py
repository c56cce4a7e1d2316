#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

import time
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncConnection


class Context:
    """A unit of work: one connection, used by every repository of a request.

    The connection is expected to be inside a transaction owned by whoever
    created the context (the transaction middleware, or a test fixture).
    """

    def __init__(
        self,
        context_id: str | None = None,
        connection: AsyncConnection | None = None,
    ):
        self.context_id = context_id or self._generate_context_id()
        self._start_timestamp = time.time()
        self._connection = connection

    def set_connection(self, connection: AsyncConnection):
        self._connection = connection

    def get_connection(self) -> AsyncConnection:
        if not self._connection:
            raise RuntimeError(
                "The context has no connection: repositories can only run "
                "inside a unit of work."
            )
        return self._connection

    def get_elapsed_time_seconds(self) -> float:
        return time.time() - self._start_timestamp

    def _generate_context_id(self) -> str:
        return str(uuid4())
