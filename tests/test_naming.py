"""
Unit tests for dual identifier resolution and wrapper naming
"""

import pytest

from cxx_bridge_generator.naming import CombinedIdent, MethodName, NamingOverride
from cxx_bridge_generator.parser import parse_foreign_function
from cxx_bridge_generator.syntax import Attribute, AttributeValue


# (base identifier, overrides, expected cpp, expected rust)
RESOLUTION_CASES = [
    ("test_function", NamingOverride(), "testFunction", "test_function"),
    ("Test_Function", NamingOverride(), "testFunction", "test_function"),
    ("my_invokable", None, "myInvokable", "my_invokable"),
    ("bar", NamingOverride(cxx_name="Foo"), "Foo", "bar"),
    ("Test_Function", NamingOverride(cxx_name="TestFunction"), "TestFunction", "Test_Function"),
    ("TestFunction", NamingOverride(rust_name="Test_Function"), "TestFunction", "Test_Function"),
    ("test_function", NamingOverride(cxx_name="TestFunction", rust_name="Test_Function"),
     "TestFunction", "Test_Function"),
    ("whatever", NamingOverride(cxx_name="cppSide", rust_name="rust_side"), "cppSide", "rust_side"),
]


class TestCombinedIdent:
    """Test CombinedIdent resolution"""

    @pytest.mark.parametrize("ident, overrides, cpp, rust", RESOLUTION_CASES)
    def test_resolve(self, ident, overrides, cpp, rust):
        combined = CombinedIdent.resolve(ident, overrides)
        assert combined == CombinedIdent(cpp=cpp, rust=rust)

    @pytest.mark.parametrize("ident, overrides, cpp, rust", RESOLUTION_CASES)
    def test_resolve_is_deterministic(self, ident, overrides, cpp, rust):
        assert CombinedIdent.resolve(ident, overrides) == CombinedIdent.resolve(ident, overrides)

    def test_both_overrides_never_fall_back_to_base(self):
        """With both overrides each side takes its own literal"""
        combined = CombinedIdent.resolve("base_name", NamingOverride(cxx_name="A", rust_name="b"))
        assert combined.cpp == "A"
        assert combined.rust == "b"

    def test_combined_ident_is_immutable(self):
        combined = CombinedIdent(cpp="a", rust="b")
        with pytest.raises(AttributeError):
            combined.cpp = "c"

    @pytest.mark.parametrize("source, cpp, rust", [
        ('fn Test_Function();', "testFunction", "test_function"),
        ('#[cxx_name = "TestFunction"] fn Test_Function();', "TestFunction", "Test_Function"),
        ('#[rust_name = "Test_Function"] fn TestFunction();', "TestFunction", "Test_Function"),
        ('#[cxx_name = "TestFunction"] #[rust_name = "Test_Function"] fn test_function();',
         "TestFunction", "Test_Function"),
        ('#[rust_name = "Test_Function"] #[cxx_name = "TestFunction"] fn test_function();',
         "TestFunction", "Test_Function"),
    ])
    def test_from_rust_function(self, source, cpp, rust):
        """Attributes on a parsed declaration drive the resolution"""
        method = parse_foreign_function(source)
        combined = CombinedIdent.from_rust_function(method.attrs, method.ident)
        assert combined.cpp == cpp
        assert combined.rust == rust

    def test_wrapper_from_invokable(self):
        wrapper = CombinedIdent.wrapper_from_invokable(CombinedIdent(cpp="myInvokable", rust="my_invokable"))
        assert wrapper == CombinedIdent(cpp="myInvokableWrapper", rust="my_invokable_wrapper")

    def test_wrapper_from_inherited(self):
        wrapper = CombinedIdent.wrapper_from_inherited(CombinedIdent(cpp="test", rust="test"))
        assert wrapper == CombinedIdent(cpp="testCxxQtInherit", rust="test_cxx_qt_inherit")


class TestNamingOverride:
    """Test extraction of naming overrides from attributes"""

    def test_no_attributes(self):
        assert NamingOverride.from_attributes(()) == NamingOverride(None, None)

    def test_string_overrides(self):
        attrs = (
            Attribute.name_value("cxx_name", "Foo"),
            Attribute.name_value("rust_name", "foo_rs"),
        )
        assert NamingOverride.from_attributes(attrs) == NamingOverride(cxx_name="Foo", rust_name="foo_rs")

    @pytest.mark.parametrize("attr", [
        Attribute("cxx_name", value=AttributeValue("int", "5")),
        Attribute("cxx_name", value=AttributeValue("path", "some::path")),
        Attribute("cxx_name"),
        Attribute("cxx_name", args=("Foo",)),
    ])
    def test_non_string_override_is_ignored(self, attr):
        """Malformed overrides are treated as absent"""
        assert NamingOverride.from_attributes((attr,)) == NamingOverride()

    def test_non_string_override_uses_default_policy(self):
        method = parse_foreign_function("#[cxx_name = 5] fn test_function();")
        combined = CombinedIdent.from_rust_function(method.attrs, method.ident)
        assert combined == CombinedIdent(cpp="testFunction", rust="test_function")

    def test_unrelated_attributes_are_ignored(self):
        method = parse_foreign_function('#[qinvokable] #[doc = "text"] fn my_method();')
        assert NamingOverride.from_attributes(method.attrs) == NamingOverride()


class TestMethodName:
    """Test names derived for methods"""

    def test_from_impl_method(self, make_method):
        parsed = make_method("fn my_invokable(self: &MyObject);")

        invokable = MethodName.from_method(parsed)
        assert invokable.name.cpp == "myInvokable"
        assert invokable.name.rust == "my_invokable"
        assert invokable.wrapper.cpp == "myInvokableWrapper"
        assert invokable.wrapper.rust == "my_invokable_wrapper"

    def test_from_method_with_cxx_name(self, make_method):
        parsed = make_method('#[cxx_name = "doThing"] fn do_thing(self: &MyObject);')

        invokable = MethodName.from_method(parsed)
        assert invokable.name == CombinedIdent(cpp="doThing", rust="do_thing")
        assert invokable.wrapper == CombinedIdent(cpp="doThingWrapper", rust="do_thing_wrapper")
