from collections import OrderedDict
from unittest import TestCase

import pytest

from inline_json.target import Buildable, JsonValue, PyValue, insert, push_back


class JsonValueTests(TestCase):

    def test_build_by_hand(self):
        obj = JsonValue.empty_object()
        obj.insert('a', JsonValue(1))
        array = JsonValue.empty_array()
        array.push_back(JsonValue('x'))
        obj.insert('b', array)
        assert obj.to_python() == {'a': 1, 'b': ['x']}

    def test_convert_is_deep(self):
        value = JsonValue.convert({'a': [1, (2, None)], 3: True})
        assert value.to_python() == {'a': [1, [2, None]], '3': True}
        assert value.value['a'].value[1].kind == 'array'

    def test_convert_passes_values_through(self):
        value = JsonValue(1)
        assert JsonValue.convert(value) is value

    def test_convert_rejects_other_things(self):
        with pytest.raises(TypeError):
            JsonValue.convert(object())

    def test_kinds(self):
        assert [JsonValue.convert(v).kind for v in
                [{}, [], None, True, 1.5, 'x']] == [
            'object', 'array', 'null', 'boolean', 'number', 'string']

    def test_insert_keeps_order_and_replaces(self):
        obj = JsonValue.empty_object()
        for key, value in [('b', 1), ('a', 2), ('b', 3)]:
            obj.insert(key, JsonValue(value))
        assert list(obj.value) == ['b', 'a']
        assert obj.to_python() == {'b': 3, 'a': 2}

    def test_wrong_container(self):
        with pytest.raises(TypeError):
            JsonValue.empty_array().insert('a', JsonValue(1))
        with pytest.raises(TypeError):
            JsonValue(1).push_back(JsonValue(2))

    def test_equality(self):
        assert JsonValue.convert([1, {'a': None}]) == JsonValue.convert([1, {'a': None}])
        assert JsonValue(True) != JsonValue(1)
        assert JsonValue(1) != 1

    def test_repr(self):
        assert repr(JsonValue.convert({'a': [1]})) == "JsonValue({'a': [1]})"


def test_buildable_is_abstract():
    with pytest.raises(NotImplementedError):
        Buildable.empty_object()
    with pytest.raises(NotImplementedError):
        Buildable().push_back(1)


def test_protocol_functions_on_builtins():
    obj = PyValue.empty_object()
    insert(obj, 'a', 1)
    array = PyValue.empty_array()
    push_back(array, obj)
    assert array == [{'a': 1}]


def test_protocol_functions_on_subclasses():
    obj = OrderedDict()
    insert(obj, 'k', 'v')
    assert obj == OrderedDict(k='v')


def test_protocol_functions_fall_back_to_methods():
    obj = JsonValue.empty_object()
    insert(obj, 'a', JsonValue(1))
    array = JsonValue.empty_array()
    push_back(array, obj)
    assert array.to_python() == [{'a': 1}]
