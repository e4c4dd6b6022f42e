"""Unit tests for reading module records from webpack stats JSON."""

import json

import pytest

from useless.core.reachability import ModuleRecord
from useless.integrations.webpack_stats import load_stats_modules, modules_from_stats


class TestModulesFromStats:
    def test_plain_module(self):
        stats = {"modules": [{"identifier": "/app/src/index.js", "name": "./src/index.js"}]}

        assert modules_from_stats(stats) == [ModuleRecord("/app/src/index.js")]

    def test_loader_chain_is_split(self):
        identifier = (
            "/app/node_modules/css-loader/dist/cjs.js!"
            "/app/node_modules/sass-loader/dist/cjs.js!"
            "/app/src/style.scss"
        )

        records = modules_from_stats({"modules": [{"identifier": identifier}]})

        assert records == [
            ModuleRecord(
                "/app/src/style.scss",
                (
                    "/app/node_modules/css-loader/dist/cjs.js",
                    "/app/node_modules/sass-loader/dist/cjs.js",
                ),
            )
        ]

    def test_module_type_prefix_is_removed(self):
        identifier = "css|/app/node_modules/css-loader/dist/cjs.js!/app/src/a.css|0||||}"

        [record] = modules_from_stats({"modules": [{"identifier": identifier}]})

        assert record.resource_path == "/app/src/a.css"
        assert record.loaders == ("/app/node_modules/css-loader/dist/cjs.js",)

    def test_name_for_condition_wins(self):
        stats = {
            "modules": [
                {
                    "identifier": "/app/node_modules/vue-loader/lib/index.js!/app/src/App.vue",
                    "nameForCondition": "/app/src/App.vue?vue&type=style&index=0",
                }
            ]
        }

        [record] = modules_from_stats(stats)

        assert record.resource_path == "/app/src/App.vue?vue&type=style&index=0"
        assert record.loaders == ("/app/node_modules/vue-loader/lib/index.js",)

    def test_modules_without_absolute_resource_are_dropped(self):
        stats = {
            "modules": [
                {"identifier": "webpack/runtime/define property getters"},
                {"identifier": "external \"react\""},
                {"name": "no identifier"},
                "not a mapping",
            ]
        }

        assert modules_from_stats(stats) == []

    def test_concatenated_and_child_modules_are_flattened(self):
        stats = {
            "modules": [
                {
                    "identifier": "/app/src/index.js + 2 modules",
                    "nameForCondition": "/app/src/index.js",
                    "modules": [
                        {"identifier": "/app/src/a.js"},
                        {"identifier": "/app/src/b.js"},
                    ],
                }
            ],
            "children": [{"modules": [{"identifier": "/app/src/worker.js"}]}],
        }

        paths = [record.resource_path for record in modules_from_stats(stats)]

        assert paths == ["/app/src/index.js", "/app/src/a.js", "/app/src/b.js", "/app/src/worker.js"]

    def test_empty_stats(self):
        assert modules_from_stats({}) == []


class TestLoadStatsModules:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text(json.dumps({"modules": [{"identifier": "/app/a.js"}]}), encoding="utf-8")

        assert load_stats_modules(path) == [ModuleRecord("/app/a.js")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_stats_modules(tmp_path / "stats.json")

    def test_non_object_content(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ValueError):
            load_stats_modules(path)
