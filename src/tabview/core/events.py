from loguru import logger
from typing import Callable, List, Union


class Connection:
    """
    Handle returned by `Signal.connect`.

    Each handle is independent: disconnecting one leaves other handles for
    the same callback connected.
    """
    def __init__(self, signal: "Signal", callback: Callable):
        self.signal = signal
        self.callback = callback

    @property
    def connected(self) -> bool:
        return self.signal.is_connected(self)

    def disconnect(self):
        self.signal.disconnect(self)

    def __repr__(self):
        return f"<Connection {self.signal.name} -> {self.callback!r}>"


class Signal:
    """
    A simple observer pattern implementation (Synchronous).
    Allows subscribers to connect to this signal and receive notifications.
    Equivalent to Qt's Signal or C#'s event.

    A callback is invoked once per emission while at least one of its
    connections is alive. Subscribers run on the emitter's stack, in
    connection order. A subscriber may call back into the emitter; the
    nested call completes before the remaining subscribers of the outer
    emission run.
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._connections: List[Connection] = []

    def connect(self, callback: Callable) -> Connection:
        """Connect a callback function to this signal."""
        connection = Connection(self, callback)
        self._connections.append(connection)
        return connection

    def disconnect(self, handle: Union[Callable, Connection]):
        """
        Disconnect a single Connection, or every connection of a callback.
        """
        if isinstance(handle, Connection):
            self._connections = [c for c in self._connections if c is not handle]
        else:
            self._connections = [c for c in self._connections if c.callback != handle]

    def disconnect_all(self):
        self._connections.clear()

    def is_connected(self, handle: Union[Callable, Connection]) -> bool:
        if isinstance(handle, Connection):
            return any(c is handle for c in self._connections)
        return any(c.callback == handle for c in self._connections)

    @property
    def subscriber_count(self) -> int:
        """Number of distinct connected callbacks."""
        return len(self._callbacks())

    def _callbacks(self) -> List[Callable]:
        callbacks: List[Callable] = []
        for connection in self._connections:
            if connection.callback not in callbacks:
                callbacks.append(connection.callback)
        return callbacks

    def emit(self, *args, **kwargs):
        """Broadcast arguments to all subscribers synchronously."""
        # Snapshot: (dis)connecting during emission applies to the next emit.
        for sub in self._callbacks():
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")
