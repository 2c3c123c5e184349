"""Tests for the extension category table."""

import pytest

from smart_file_manager.core.categories import (
    FALLBACK_CATEGORY, FileCategory, category_for, category_table
)


class TestCategoryFor:

    @pytest.mark.parametrize("extension, label", [
        (".jpg", "Images"),
        (".pdf", "Documents"),
        (".mkv", "Videos"),
        (".flac", "Audio"),
        (".7z", "Archives"),
        (".rs", "Code"),
        (".deb", "Executables"),
    ])
    def test_known_extensions(self, extension, label):
        assert category_for(extension) == label

    @pytest.mark.parametrize("extension", [".xyz123", "", ".JPG", "jpg"])
    def test_unknown_extensions_fall_back(self, extension):
        assert category_for(extension) == "Others"
        assert FALLBACK_CATEGORY == "Others"

    def test_enum_lookup(self):
        assert FileCategory.from_extension(".png") is FileCategory.IMAGES
        assert FileCategory.from_extension(".nope") is FileCategory.OTHERS


class TestCategoryTable:

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            FileCategory.get_extensions()[".new"] = FileCategory.CODE

    def test_every_extension_is_lowercase_and_dotted(self):
        for extension in FileCategory.get_extensions():
            assert extension.startswith(".")
            assert extension == extension.lower()

    def test_grouped_table_is_sorted(self):
        table = category_table()

        assert list(table) == sorted(table)
        assert "Others" not in table
        for extensions in table.values():
            assert extensions == sorted(extensions)
        assert table["Executables"] == [".app", ".deb", ".dll", ".exe", ".rpm", ".so"]

    def test_grouped_table_covers_all_extensions(self):
        table = category_table()
        total = sum(len(extensions) for extensions in table.values())
        assert total == len(FileCategory.get_extensions()) == 61

    def test_grouped_table_is_stable(self):
        assert category_table() == category_table()
