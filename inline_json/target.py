"""Types literals can be compiled into

Generated code needs only five things from a target type ``T``:
``T.empty_object()``, ``T.empty_array()``, ``value.insert(key, item)``,
``value.push_back(item)`` and ``T.convert(anything)``. ``Buildable`` spells
that out, and ``JsonValue`` is a complete implementation.

Types which can't grow those methods (like ``dict`` and ``list``) can still be
targets: compile with ``ProtocolCalls``, which routes ``insert`` and
``push_back`` through the dispatching functions at the bottom of this module,
and register implementations for them there.

"""
from functools import singledispatch


__all__ = ['Buildable', 'JsonValue', 'PyValue', 'insert', 'push_back']


class Buildable(object):
    """The operations generated code calls on its target type"""

    @classmethod
    def empty_object(cls):
        """Return a new object with no entries."""
        raise NotImplementedError

    @classmethod
    def empty_array(cls):
        """Return a new array with no elements."""
        raise NotImplementedError

    def insert(self, key, value):
        """Add an entry to me, an object. ``key`` is always a string."""
        raise NotImplementedError

    def push_back(self, value):
        """Append an element to me, an array."""
        raise NotImplementedError

    @classmethod
    def convert(cls, value):
        """Return ``value`` as an instance of this type.

        Called on every scalar expression and on every finished object and
        array, so it must pass instances of the type through.

        """
        raise NotImplementedError


class JsonValue(Buildable):
    """A JSON value: an object, array, string, number, boolean or null

    Objects remember insertion order. Inserting a key which is already there
    replaces its value in place.

    """
    __slots__ = ['value']

    # The raw Python types a non-container value can hold
    scalars = (type(None), bool, int, float, str)

    def __init__(self, value=None):
        self.value = value

    @classmethod
    def empty_object(cls):
        return cls({})

    @classmethod
    def empty_array(cls):
        return cls([])

    def insert(self, key, value):
        if not isinstance(self.value, dict):
            raise TypeError("Can't insert %r into a JSON %s." % (key, self.kind))
        self.value[key] = value

    def push_back(self, value):
        if not isinstance(self.value, list):
            raise TypeError("Can't append to a JSON %s." % self.kind)
        self.value.append(value)

    @classmethod
    def convert(cls, value):
        """Wrap ``value``, converting any dicts and lists in it deeply."""
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            obj = cls.empty_object()
            for k, v in value.items():
                obj.insert(str(k), cls.convert(v))
            return obj
        if isinstance(value, (list, tuple)):
            array = cls.empty_array()
            for v in value:
                array.push_back(cls.convert(v))
            return array
        if isinstance(value, cls.scalars):
            return cls(value)
        raise TypeError("Can't convert %r to %s." % (value, cls.__name__))

    @property
    def kind(self):
        """Return the name of the JSON type I hold."""
        value = self.value
        if isinstance(value, dict):
            return 'object'
        if isinstance(value, list):
            return 'array'
        if value is None:
            return 'null'
        if isinstance(value, bool):
            return 'boolean'
        if isinstance(value, str):
            return 'string'
        return 'number'

    def to_python(self):
        """Return my value as plain dicts, lists and scalars."""
        if isinstance(self.value, dict):
            return {k: v.to_python() for k, v in self.value.items()}
        if isinstance(self.value, list):
            return [v.to_python() for v in self.value]
        return self.value

    def __eq__(self, other):
        return (isinstance(other, JsonValue) and
                self.kind == other.kind and
                self.to_python() == other.to_python())

    __hash__ = None

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.to_python())


class PyValue(object):
    """Builds plain dicts and lists

    It has no ``insert`` or ``push_back``, so compile with ``ProtocolCalls``.

    """
    empty_object = staticmethod(dict)
    empty_array = staticmethod(list)

    @staticmethod
    def convert(value):
        return value


@singledispatch
def insert(container, key, value):
    """Add an entry to ``container``, by its ``insert()`` method unless an
    implementation is registered for its type."""
    container.insert(key, value)


@insert.register(dict)
def _insert_into_dict(container, key, value):
    container[key] = value


@singledispatch
def push_back(container, value):
    """Append to ``container``, by its ``push_back()`` method unless an
    implementation is registered for its type."""
    container.push_back(value)


@push_back.register(list)
def _push_back_onto_list(container, value):
    container.append(value)
