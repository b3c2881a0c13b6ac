"""Tests for the package's public surface."""

import lenient_markup_parser


class TestPackageExports:
    """Test package metadata and exports."""

    def test_version(self):
        assert lenient_markup_parser.__version__ == "0.1.0"
        assert lenient_markup_parser.__author__

    def test_all_names_importable(self):
        for name in lenient_markup_parser.__all__:
            assert hasattr(lenient_markup_parser, name), name

    def test_simple_functions(self):
        assert lenient_markup_parser.serialize("<b>x") == "<b>x</b>"
        root = lenient_markup_parser.build_tree("<b>x")
        assert root.find("b").text_content == "x"
