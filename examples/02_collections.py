"""
Example 02: Remote Collections

Collection-typed fields are backed by remote structures. They are created
lazily on first read, or converted when a local collection is assigned.
"""

import collections
import threading
from dataclasses import dataclass, field

from live_object import (
    BlockingQueue,
    LiveObjectService,
    LiveRepository,
    MaterializationPolicy,
    StoreConfig,
    entity,
)


@dataclass
class Board:
    """Project board entity"""
    slug: str
    columns: list[str] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)
    watchers: set[str] = field(default_factory=set)
    activity: collections.deque = field(default_factory=collections.deque)
    jobs: BlockingQueue = None


class BoardRepository(LiveRepository[Board]):
    """Repository for Board entities"""

    def open_board(self, slug: str) -> Board:
        board = self.get_or_create(slug)
        if not board.columns:
            board.columns = ["todo", "doing", "done"]
        return board


def main():
    service = LiveObjectService.from_config(
        StoreConfig(driver="memory"),
        materialization=MaterializationPolicy.FIRST_WRITE_WINS,
    )
    service.register(entity(Board).key("slug").auto_fields().build())
    boards = BoardRepository(service, Board)

    board = boards.open_board("platform")
    print(f"Columns: {list(board.columns)} ({type(board.columns).__name__})")

    board.labels["bug"] = "red"
    board.watchers.add("ann")
    board.activity.appendleft("board opened")
    print(f"Labels: {board.labels.read_all()}")
    print(f"Watchers: {board.watchers.read_all()}")
    print(f"Activity: {list(board.activity)}")

    print("\n=== Producer / consumer over a remote queue ===")
    jobs = board.jobs

    def worker():
        item = boards.get("platform").jobs.get(timeout=5)
        print(f"worker got: {item}")

    t = threading.Thread(target=worker)
    t.start()
    jobs.put("rebuild index")
    t.join()

    service.close()


if __name__ == "__main__":
    main()
