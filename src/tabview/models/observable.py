"""
Observable Property Descriptor.

Provides automatic change notification on attribute assignment, in the
style of WPF's INotifyPropertyChanged, without requiring a Qt object.

Usage:
    class Item(ObservableBase):
        title = ObservableProperty(default="")
        size = ObservableProperty(default=None, coerce=lambda v: max(0, v))

    item.subscribe(redraw)   # zero-argument callback
    item.title = "Alice"     # redraw() is called
"""
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from tabview.core.events import Connection, Signal

T = TypeVar('T')


class ObservableProperty(Generic[T]):
    """
    Descriptor that notifies its owner when the property value changes.

    Args:
        default: Default value for the property.
        coerce: Optional callable to coerce/validate the value before setting.
        always_notify: Notify even when the new value equals the old one.
        identity: Compare by identity instead of equality. Use for opaque
            values that are stored and returned by reference.
    """

    def __init__(
        self,
        default: T = None,
        coerce: Optional[Callable[[Any], T]] = None,
        always_notify: bool = False,
        identity: bool = False
    ):
        self.default = default
        self.coerce = coerce
        self.always_notify = always_notify
        self.identity = identity
        self._attr_name: str = ""
        self._public_name: str = ""

    def __set_name__(self, owner: type, name: str) -> None:
        """Called when the descriptor is assigned to a class attribute."""
        self._public_name = name
        self._attr_name = f"_observable_{name}"

    def __get__(self, obj: Optional["ObservableBase"], objtype: type = None) -> T:
        if obj is None:
            return self  # type: ignore
        return getattr(obj, self._attr_name, self.default)

    def __set__(self, obj: "ObservableBase", value: Any) -> None:
        """Set the property value and notify if different."""
        if self.coerce is not None:
            value = self.coerce(value)

        old_value = getattr(obj, self._attr_name, self.default)

        if self.identity:
            changed = old_value is not value
        else:
            changed = old_value != value

        if self.always_notify or changed:
            setattr(obj, self._attr_name, value)
            obj.notify_property_changed(self._public_name, value)


class ObservableBase:
    """
    Base class for entities with property change notification.

    Provides:
    - `property_changed(name, value)` signal for any property change.
    - `changed()` zero-argument signal, emitted right after it.
    """

    def __init__(self):
        self.property_changed = Signal(f"{type(self).__name__}.property_changed")
        self.changed = Signal(f"{type(self).__name__}.changed")

    def notify_property_changed(self, property_name: str, value: Any) -> None:
        """
        Manually emit a property changed notification.

        Use this for properties not using the ObservableProperty descriptor.
        """
        self.property_changed.emit(property_name, value)
        self.changed.emit()

    def subscribe(self, callback: Callable[[], Any]) -> Connection:
        """Register a zero-argument change callback."""
        return self.changed.connect(callback)

    def unsubscribe(self, handle: Union[Callable[[], Any], Connection]) -> None:
        self.changed.disconnect(handle)
