"""Unit tests for stylesheet directive extraction and import resolution."""

from pathlib import Path

import pytest

from tests.support.project_builder import write_files
from useless.core.path_utils import canonicalize
from useless.core.stylesheets import (
    StylesheetImportResolver,
    candidate_paths,
    extract_targets,
    uses_stylesheet_loader,
)


class TestExtractTargets:
    def test_import_use_and_forward(self):
        text = """
        @import "variables";
        @use 'mixins' as m;
        @forward "tokens" show $color;
        """

        assert extract_targets(text) == ["variables", "mixins", "tokens"]

    def test_comma_separated_imports(self):
        assert extract_targets('@import "a", \'b\' , "c";') == ["a", "b", "c"]

    def test_missing_semicolon(self):
        assert extract_targets('@import "last"') == ["last"]

    def test_less_import_options(self):
        assert extract_targets('@import (reference) "theme.less";') == ["theme.less"]

    def test_comments_are_skipped(self):
        text = """
        // @import "line-commented";
        /* @import "block-commented"; */
        /*
        @use "multi-line";
        */
        @import "kept";
        """

        assert extract_targets(text) == ["kept"]

    def test_trailing_line_comment_is_skipped(self):
        text = '@import "a"; // @import "b";\n@use "c"; /* @use "d"; */'

        assert extract_targets(text) == ["a", "c"]

    def test_comment_markers_inside_quotes_are_kept(self):
        text = "@import \"https://cdn.example.com/x.css\"; // old\n@import 'lib/*/all';"

        assert extract_targets(text) == ["https://cdn.example.com/x.css", "lib/*/all"]

    def test_url_imports_are_not_quoted_targets(self):
        assert extract_targets("@import url(theme.css);") == []

    def test_empty_target_is_dropped(self):
        assert extract_targets('@import "";') == []


class TestCandidatePaths:
    def test_extensionless_target_order(self, tmp_path):
        candidates = candidate_paths("theme", tmp_path)

        assert candidates == [
            tmp_path / "theme.scss",
            tmp_path / "theme.sass",
            tmp_path / "theme.less",
            tmp_path / "theme.css",
            tmp_path / "_theme.scss",
            tmp_path / "_theme.sass",
            tmp_path / "_theme.less",
            tmp_path / "_theme.css",
            tmp_path / "theme" / "_index.scss",
            tmp_path / "theme" / "_index.sass",
            tmp_path / "theme" / "_index.less",
            tmp_path / "theme" / "_index.css",
            tmp_path / "theme" / "index.scss",
            tmp_path / "theme" / "index.sass",
            tmp_path / "theme" / "index.less",
            tmp_path / "theme" / "index.css",
        ]

    def test_target_with_extension(self, tmp_path):
        assert candidate_paths("dir/colors.scss", tmp_path) == [
            tmp_path / "dir" / "colors.scss",
            tmp_path / "dir" / "_colors.scss",
        ]

    def test_relative_parent_target(self, tmp_path):
        candidates = candidate_paths("../shared/vars", tmp_path / "styles")

        assert candidates[0] == tmp_path / "styles" / ".." / "shared" / "vars.scss"


class TestResolveTarget:
    def test_plain_file_wins_over_partial(self, tmp_path):
        write_files(tmp_path, {"vars.scss": "", "_vars.scss": "", "main.scss": ""})
        resolver = StylesheetImportResolver()

        assert resolver.resolve_target("vars", tmp_path / "main.scss") == tmp_path / "vars.scss"

    def test_partial_resolution(self, tmp_path):
        write_files(tmp_path, {"_mixins.scss": "", "main.scss": ""})
        resolver = StylesheetImportResolver()

        resolved = resolver.resolve_target("mixins", tmp_path / "main.scss")

        assert resolved == tmp_path / "_mixins.scss"

    def test_index_resolution(self, tmp_path):
        write_files(tmp_path, {"theme/_index.scss": "", "main.scss": ""})
        resolver = StylesheetImportResolver()

        resolved = resolver.resolve_target("theme", tmp_path / "main.scss")

        assert resolved == tmp_path / "theme" / "_index.scss"

    @pytest.mark.parametrize(
        "target",
        [
            "sass:math",
            "~bootstrap/scss/bootstrap",
            "https://fonts.example.com/css",
            "//cdn.example.com/reset.css",
            "data:text/css,body{}",
            "node_modules/normalize.css/normalize.css",
        ],
    )
    def test_external_and_vendored_targets_are_skipped(self, tmp_path, target):
        checked = []
        resolver = StylesheetImportResolver(exists=lambda path: checked.append(path) or True)

        assert resolver.resolve_target(target, tmp_path / "main.scss") is None
        assert checked == []

    def test_missing_target(self, tmp_path):
        resolver = StylesheetImportResolver()

        assert resolver.resolve_target("nothing", tmp_path / "main.scss") is None


class TestCollectClosure:
    def test_transitive_closure_with_partials(self, tmp_path):
        write_files(
            tmp_path,
            {
                "a.scss": '@import "b";',
                "b.scss": '@use "c";',
                "_c.scss": "$x: 1;",
                "unrelated.scss": "",
            },
        )

        result = StylesheetImportResolver().collect_closure(tmp_path / "a.scss")

        assert result.resolved == {
            canonicalize(tmp_path / "a.scss"),
            canonicalize(tmp_path / "b.scss"),
            canonicalize(tmp_path / "_c.scss"),
        }
        assert result.misses == []

    def test_cycle_terminates(self, tmp_path):
        write_files(tmp_path, {"a.scss": '@import "b";', "b.scss": '@import "a";'})

        result = StylesheetImportResolver().collect_closure(tmp_path / "a.scss")

        assert result.resolved == {
            canonicalize(tmp_path / "a.scss"),
            canonicalize(tmp_path / "b.scss"),
        }

    def test_unresolved_targets_are_recorded(self, tmp_path):
        write_files(tmp_path, {"a.scss": '@import "ghost"; @use "sass:math";'})

        result = StylesheetImportResolver().collect_closure(tmp_path / "a.scss")

        assert result.resolved == {canonicalize(tmp_path / "a.scss")}
        assert [target for _, target in result.misses] == ["ghost", "sass:math"]

    def test_entry_with_query_suffix(self, tmp_path):
        write_files(tmp_path, {"Comp.vue": '<style lang="scss">@import "vars";</style>', "_vars.scss": ""})

        result = StylesheetImportResolver().collect_closure(f"{tmp_path / 'Comp.vue'}?vue&type=style&index=0")

        assert canonicalize(tmp_path / "_vars.scss") in result.resolved
        assert canonicalize(tmp_path / "Comp.vue") in result.resolved

    def test_mixed_case_paths_are_read_from_disk(self, tmp_path):
        write_files(tmp_path, {"Styles/Main.scss": '@import "Theme";', "Styles/_Theme.scss": ""})

        result = StylesheetImportResolver().collect_closure(Path(tmp_path / "Styles" / "Main.scss"))

        assert canonicalize(tmp_path / "Styles" / "_Theme.scss") in result.resolved

    def test_relative_entry_is_read_against_base(self, tmp_path):
        write_files(tmp_path, {"src/a.scss": '@import "b";', "src/_b.scss": ""})

        result = StylesheetImportResolver().collect_closure("src/a.scss?inline", base=tmp_path)

        assert result.resolved == {
            canonicalize(tmp_path / "src" / "a.scss"),
            canonicalize(tmp_path / "src" / "_b.scss"),
        }

    def test_unreadable_entry_yields_only_itself(self, tmp_path):
        result = StylesheetImportResolver().collect_closure(tmp_path / "missing.scss")

        assert result.resolved == {canonicalize(tmp_path / "missing.scss")}


def test_uses_stylesheet_loader():
    assert uses_stylesheet_loader(["/p/node_modules/sass-loader/dist/cjs.js"])
    assert uses_stylesheet_loader(("less-loader",))
    assert not uses_stylesheet_loader(["babel-loader", "css-loader"])
    assert not uses_stylesheet_loader([])
