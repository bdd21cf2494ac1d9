"""
Pytest configuration and fixtures
"""

import pytest
from cxx_bridge_generator.parsed import ParsedMethod
from cxx_bridge_generator.parser import parse_foreign_function


MY_OBJECT_BRIDGE = """
#[cxx_qt::bridge]
pub mod qobject {
    unsafe extern "RustQt" {
        #[qinvokable]
        fn say_hi(self: &MyObject, string: &QString, number: i32);

        #[qinvokable]
        #[cxx_name = "incrementNumber"]
        fn increment(self: Pin<&mut MyObject>);

        #[qsignal]
        fn number_changed(self: Pin<&mut MyObject>);
    }

    unsafe extern "C++Qt" {
        #[inherit]
        fn data(self: &MyObject, index: &QModelIndex, role: i32) -> QVariant;

        #[inherit]
        unsafe fn begin_reset_model(self: Pin<&mut MyObject>);
    }
}
"""


@pytest.fixture
def temp_dir(tmp_path):
    """A temporary directory as a Path"""
    return tmp_path


@pytest.fixture
def bridge_source():
    """Source text of a bridge with invokables and inherited methods"""
    return MY_OBJECT_BRIDGE


@pytest.fixture
def bridge_file(tmp_path):
    """Write the sample bridge to a file"""
    path = tmp_path / "my_object.rs"
    path.write_text(MY_OBJECT_BRIDGE)
    return str(path)


@pytest.fixture
def config_file(tmp_path, bridge_file):
    """Write a configuration listing the sample bridge"""
    path = tmp_path / "bridges.xml"
    path.write_text(f"""
<bridges visibility="pub">
    <bridge file="{bridge_file}"/>
</bridges>
""")
    return str(path)


@pytest.fixture
def make_method():
    """Build a ParsedMethod from declaration source"""
    def _make(source: str, **overrides) -> ParsedMethod:
        method = parse_foreign_function(source)
        fields = dict(
            method=method,
            qobject_ident="MyObject",
            mutable=False,
            safe=not method.unsafe,
            parameters=[],
            specifiers=set(),
            is_qinvokable=True,
        )
        fields.update(overrides)
        return ParsedMethod(**fields)
    return _make


# Bridge declaring Qt widget types, as a cxx-qt application without CMake would
QT_WIDGETS_BRIDGE = """#[cxx_qt::bridge]
pub mod qobject {
    // ANCHOR_END: book_bridge_macro

    // ANCHOR: book_qstring_import
    unsafe extern "C++Qt" {
        include!("cxx-qt-lib/qstring.h");
        /// An alias to the QString type
        type QString = cxx_qt_lib::QString;

        include!(<QPushButton>);
        #[qobject]
        type QPushButton;

        include!(<QWidget>);
        #[qobject]
        type QWidget;

        #[qsignal]
        fn clicked(self: Pin<&mut QPushButton>, checked: bool);

        fn show(self: Pin<&mut QPushButton>);

        include!(<QMainWindow>);
        #[qobject]
        type QMainWindow;

        fn show(self: Pin<&mut QMainWindow>);
    }

    #[namespace = "rust::cxxqtlib1"]
    unsafe extern "C++" {
        include!("cxx-qt-lib/common.h");

        #[rust_name = "QPushButton_new_ptr"]
        fn new_ptr() -> *mut QPushButton;

        #[rust_name = "QPushButton_new_ptr_with_text"]
        fn new_ptr(text: &QString) -> *mut QPushButton;

        #[rust_name = "QPushButton_new_ptr_with_text_parent"]
        unsafe fn new_ptr(text: &QString, parent: *mut QWidget) -> *mut QPushButton;

        #[rust_name = "QMainWindow_new_ptr"]
        fn new_ptr() -> *mut QMainWindow;
    }
}
"""


@pytest.fixture
def widgets_bridge_file(tmp_path):
    """Write the Qt widgets bridge to a file"""
    path = tmp_path / "cxxqt_object.rs"
    path.write_text(QT_WIDGETS_BRIDGE)
    return str(path)
