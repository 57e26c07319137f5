"""
Unit tests for the namespace registry

NamespaceRegistry:
- Creates namespaces for the recognized categories only
- Exposes initialized namespaces as attributes
- Applies the wrapping policy (wrap / chain)
- Tears namespaces down (drop_namespace / reset)
"""

import datetime
import re
import threading
from decimal import Decimal
from fractions import Fraction

import pytest

from primitive_sugar import (
    Chainable,
    NamespaceRegistry,
    Sugar,
    UnknownNamespaceError,
)
from primitive_sugar.core.categories import CATEGORIES, category_of
from tests.fixtures.methods import add


class TestNamespaceCreation:
    """Test creating and looking up namespaces"""

    def setup_method(self):
        Sugar.reset()

    def teardown_method(self):
        Sugar.reset()

    def test_create_namespace(self):
        """Should create and expose a namespace"""
        number = Sugar.create_namespace('Number')

        assert Sugar.Number is number
        assert Sugar.get_namespace('Number') is number
        assert Sugar.has_namespace('Number')

    def test_create_is_idempotent(self):
        """Should return the existing namespace on repeated creation"""
        first = Sugar.create_namespace('String')
        first.define_instance('add', add)

        second = Sugar.create_namespace('String')

        assert second is first
        assert second.has_instance('add')

    @pytest.mark.parametrize('name', CATEGORIES)
    def test_every_category_can_be_created(self, name):
        """Should accept each recognized category"""
        Sugar.create_namespace(name)

        assert name in Sugar.namespaces()

    def test_unknown_namespace_rejected(self):
        """Should refuse names outside the closed set of categories"""
        with pytest.raises(UnknownNamespaceError):
            Sugar.create_namespace('Foo')

        assert not hasattr(Sugar, 'Foo')

    def test_uninitialized_namespace_not_an_attribute(self):
        """Should not expose namespaces before they are initialized"""
        assert not hasattr(Sugar, 'Array')

        with pytest.raises(UnknownNamespaceError):
            Sugar.get_namespace('Array')

    def test_find_namespace(self):
        """Should return None for uninitialized namespaces"""
        assert Sugar.find_namespace('Number') is None

        number = Sugar.create_namespace('Number')
        assert Sugar.find_namespace('Number') is number


class TestTeardown:
    """Test dropping namespaces"""

    def setup_method(self):
        Sugar.reset()

    def teardown_method(self):
        Sugar.reset()

    def test_drop_namespace(self):
        """Should forget a namespace and its methods"""
        Sugar.create_namespace('Number').define_instance('add', add)

        Sugar.drop_namespace('Number')

        assert not hasattr(Sugar, 'Number')
        assert not Sugar.create_namespace('Number').has_instance('add')

    def test_drop_unknown_raises_error(self):
        """Should refuse to drop a namespace that doesn't exist"""
        with pytest.raises(UnknownNamespaceError):
            Sugar.drop_namespace('Number')

    def test_drop_is_logged(self):
        """Should log the drop in the dropped namespace's own log"""
        number = Sugar.create_namespace('Number')
        number.define_instance('add', add)

        Sugar.drop_namespace('Number')

        warnings = number.get_logs(level='WARNING')
        assert len(warnings) == 1
        assert warnings[0]['instance_methods'] == 1

    def test_reset(self):
        """Should drop every namespace"""
        for name in ('Number', 'String', 'Array'):
            Sugar.create_namespace(name)

        Sugar.reset()

        assert Sugar.namespaces() == []


class TestWrap:
    """Test the wrapping policy"""

    def setup_method(self):
        Sugar.reset()

    def teardown_method(self):
        Sugar.reset()

    @pytest.mark.parametrize('value', [True, False, None])
    def test_passthrough_values(self, value):
        """Should return booleans and None bare"""
        assert Sugar.wrap(value) is value

    @pytest.mark.parametrize('value, category', [
        (0, 'Number'),
        (1.5, 'Number'),
        (2j, 'Number'),
        (Decimal('1.1'), 'Number'),
        (Fraction(1, 3), 'Number'),
        ('', 'String'),
        ([], 'Array'),
        ((1, 2), 'Array'),
        ({}, 'Object'),
        (datetime.date(2024, 1, 1), 'Date'),
        (datetime.timedelta(seconds=1), 'Date'),
        (re.compile('a+'), 'RegExp'),
    ])
    def test_category_by_type(self, value, category):
        """Should wrap by the value's real type and initialize its namespace"""
        wrapped = Sugar.wrap(value)

        assert isinstance(wrapped, Chainable)
        assert wrapped.namespace_name == category
        assert Sugar.has_namespace(category)

    def test_spoofed_class_attribute_ignored(self):
        """Should not trust a spoofed __class__"""
        class Spoof:
            @property
            def __class__(self):
                return list

        spoof = Spoof()

        assert isinstance(spoof, list)
        assert category_of(spoof) is None
        assert Sugar.wrap(spoof).namespace_name == 'Object'
        assert not Sugar.has_namespace('Array')

    def test_chain_always_wraps(self):
        """Should wrap booleans and None with chain()"""
        wrapped = Sugar.chain(None)

        assert isinstance(wrapped, Chainable)
        assert wrapped.raw is None
        assert Sugar.chain(True).raw is True
        assert Sugar.chain(3).namespace_name == 'Number'

    def test_chainable_class_per_category(self):
        """Should reuse one chainable class per category"""
        assert Sugar.chainable_class('Number') is Sugar.chainable_class('Number')
        assert Sugar.chainable_class('Number') is not Sugar.chainable_class('String')

        with pytest.raises(UnknownNamespaceError):
            Sugar.chainable_class('Foo')


class TestIsolatedRegistries:
    """Test that separate registries don't share state"""

    def setup_method(self):
        Sugar.reset()

    def teardown_method(self):
        Sugar.reset()

    def test_registries_independent(self):
        """Should keep methods in their own registry"""
        local = NamespaceRegistry()
        local.create_namespace('Number').define_instance('add', add)
        Sugar.create_namespace('Number')

        assert local.Number.new(1).add(1).raw == 2
        assert not Sugar.Number.has_instance('add')

    def test_results_stay_in_registry(self):
        """Should wrap results with the registry of the receiver"""
        local = NamespaceRegistry()
        local.create_namespace('Number').define_instance('add', add)

        result = local.Number.new(1).add(1)

        assert result.registry is local
        assert local.has_namespace('Number')
        assert not Sugar.has_namespace('Number')


class TestConcurrentDefinition:
    """Test the single-writer lock"""

    def teardown_method(self):
        Sugar.reset()

    def test_only_one_definition_wins(self):
        """Should accept exactly one of many racing definitions"""
        registry = NamespaceRegistry()
        number = registry.create_namespace('Number')
        outcomes = []
        barrier = threading.Barrier(8)

        def define(i):
            barrier.wait()
            try:
                number.define_instance('add', lambda n, m, i=i: n + m)
                outcomes.append('ok')
            except Exception as e:
                outcomes.append(type(e).__name__)

        threads = [threading.Thread(target=define, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count('ok') == 1
        assert outcomes.count('DuplicateDefinitionError') == 7

    def test_lazy_initialization_creates_one_namespace(self):
        """Should create a single namespace under concurrent wrapping"""
        registry = NamespaceRegistry()
        seen = []
        barrier = threading.Barrier(8)

        def wrap():
            barrier.wait()
            registry.wrap([1])
            seen.append(registry.get_namespace('Array'))

        threads = [threading.Thread(target=wrap) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 8
        assert all(ns is seen[0] for ns in seen)
