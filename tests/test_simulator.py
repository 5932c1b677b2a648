"""Tests for the simulator endpoint documents.

Covers:
  - key order of every document and entry shape
  - field subsets (is_ui / blurb / gpu_range differences between views)
  - getDefaultComponent failing hard on unknown ids
  - executeScript dropping unknown component ids but failing on an unknown container
"""

from __future__ import annotations

import dataclasses
import unittest

from gamehub_api.generators import (
    GenerationError,
    generate_all_component_list,
    generate_component_list,
    generate_container_list,
    generate_default_component,
    generate_execute_script,
    generate_imagefs_detail,
)
from gamehub_api.generators.simulator import to_container_entry
from tests.catalog_fixture import (
    make_component, make_components, make_containers, make_defaults, make_registry,
)


TS = "1700000123"


class TestComponentLists(unittest.TestCase):

    def test_all_component_list_order(self):
        doc = generate_all_component_list(make_registry(), TS)
        self.assertEqual(list(doc), ["code", "msg", "data", "time"])
        self.assertEqual(doc["time"], TS)
        self.assertEqual(list(doc["data"]), ["list", "total"])
        self.assertEqual([e["id"] for e in doc["data"]["list"]], [11, 10, 20, 31, 30, 40, 70])
        self.assertEqual(doc["data"]["total"], 7)

    def test_all_component_list_fields(self):
        entry = generate_all_component_list(make_registry(), TS)["data"]["list"][0]
        self.assertEqual(entry["is_ui"], 1)
        self.assertNotIn("blurb", entry)
        self.assertNotIn("gpu_range", entry)

    def test_component_list_is_type_1_only(self):
        data = generate_component_list(make_registry(), TS)["data"]
        self.assertEqual(list(data), ["list", "total", "page", "pageSize"])
        self.assertEqual([e["id"] for e in data["list"]], [11, 10])
        self.assertEqual((data["page"], data["pageSize"]), (1, 10))

    def test_component_list_fields(self):
        newest, oldest = generate_component_list(make_registry(), TS)["data"]["list"]
        self.assertEqual(list(newest), [
            "blurb", "display_name", "download_url", "file_md5", "file_name", "file_size",
            "gpu_range", "id", "logo", "name", "type", "version", "version_code",
        ])
        self.assertEqual(newest["blurb"], "Latest box64")
        self.assertEqual(newest["gpu_range"], "Adreno 6xx+")
        self.assertEqual(oldest["blurb"], "")
        self.assertEqual(oldest["gpu_range"], "")
        self.assertNotIn("is_ui", newest)

    def test_timestamp_defaults_to_now(self):
        doc = generate_component_list(make_registry())
        self.assertTrue(doc["time"].isdigit())


class TestContainerList(unittest.TestCase):

    def test_sub_data_omitted_when_absent(self):
        with_sub, without_sub = generate_container_list(make_registry(), TS)["data"]
        self.assertEqual(list(with_sub), [
            "display_name", "download_url", "file_md5", "file_name", "file_size",
            "framework", "framework_type", "id", "is_steam", "logo", "name", "sub_data",
            "version", "version_code",
        ])
        self.assertEqual(list(with_sub["sub_data"]),
                         ["sub_file_name", "sub_download_url", "sub_file_md5"])
        self.assertNotIn("sub_data", without_sub)
        self.assertEqual(list(without_sub)[-2:], ["version", "version_code"])

    def test_explicit_null_sub_data_kept(self):
        container = dataclasses.replace(make_containers()[1], sub_data_listed=True)
        entry = to_container_entry(container)
        self.assertIn("sub_data", entry)
        self.assertIsNone(entry["sub_data"])
        self.assertEqual(list(entry)[-3:], ["sub_data", "version", "version_code"])


class TestDefaultComponent(unittest.TestCase):

    def test_shape(self):
        data = generate_default_component(make_registry(), TS)["data"]
        self.assertEqual(list(data), ["container", "gpu", "dxvk", "vkd3d", "translator", "steamClient"])
        self.assertIsNone(data["container"])
        self.assertIsNone(data["gpu"])
        self.assertEqual(data["dxvk"]["id"], 31)
        self.assertEqual(data["vkd3d"]["id"], 40)
        self.assertEqual(data["steamClient"]["id"], 70)
        self.assertEqual(list(data["dxvk"]), list(data["translator"]))

    def test_translator_placeholder(self):
        translator = generate_default_component(make_registry(), TS)["data"]["translator"]
        self.assertEqual(translator["id"], 0)
        self.assertEqual(translator["type"], 0)
        self.assertEqual(translator["version_code"], 0)
        self.assertEqual(translator["name"], "")

    def test_unknown_dxvk_raises(self):
        registry = make_registry(defaults=make_defaults(dxvk=999))
        with self.assertRaises(GenerationError) as ctx:
            generate_default_component(registry, TS)
        self.assertIn("dxvk=999", str(ctx.exception))

    def test_unknown_steam_client_raises(self):
        components = [c for c in make_components() if c.id != 70]
        with self.assertRaises(GenerationError):
            generate_default_component(make_registry(components), TS)


class TestImagefsDetail(unittest.TestCase):

    def test_fixed_key_order(self):
        data = generate_imagefs_detail(make_registry(), TS)["data"]
        self.assertEqual(list(data), [
            "id", "version", "version_code", "name", "logo", "upgrade_msg", "blurb",
            "download_url", "file_md5", "file_size", "file_name", "display_name",
        ])
        self.assertEqual(data["upgrade_msg"], "Upgrade available")


class TestExecuteScript(unittest.TestCase):

    def test_data_key_order(self):
        data = generate_execute_script(make_registry(), "generic", TS)["data"]
        self.assertEqual(list(data), [
            "audio_driver", "component", "component_ids", "container", "container_id",
            "controller", "cpu_limitations", "directx_panel", "environment",
            "execution_context", "imagefs", "launch_windowed_mode", "start_param",
            "translations", "video_memory",
        ])

    def test_components_follow_configured_order(self):
        data = generate_execute_script(make_registry(), "generic", TS)["data"]
        self.assertEqual([c["id"] for c in data["component"]], [31, 40, 10])
        self.assertEqual(data["component_ids"], [31, 40, 10])

    def test_component_entry(self):
        entry = generate_execute_script(make_registry(), "qualcomm", TS)["data"]["component"][0]
        self.assertEqual(list(entry), [
            "base_type", "blurb", "display_name", "download_url", "file_md5", "file_name",
            "file_size", "id", "is_base", "is_ui", "logo", "name", "type", "version",
            "version_code",
        ])
        self.assertEqual((entry["is_base"], entry["base_type"], entry["is_ui"]), (0, 0, 1))

    def test_unknown_component_ids_are_dropped(self):
        registry = make_registry(defaults=make_defaults(generic_component_ids=[31, 777, 10]))
        data = generate_execute_script(registry, "generic", TS)["data"]
        self.assertEqual([c["id"] for c in data["component"]], [31, 10])
        self.assertEqual(data["component_ids"], [31, 777, 10])

    def test_unknown_container_raises(self):
        registry = make_registry(defaults=make_defaults(container=404))
        with self.assertRaises(GenerationError) as ctx:
            generate_execute_script(registry, "generic", TS)
        self.assertIn("Container 404 not found", str(ctx.exception))

    def test_variant_context(self):
        registry = make_registry()
        generic = generate_execute_script(registry, "generic", TS)["data"]["execution_context"]
        qualcomm = generate_execute_script(registry, "qualcomm", TS)["data"]["execution_context"]
        self.assertEqual(list(generic), ["params", "script_id", "timestamp"])
        self.assertEqual(generic["script_id"], 1)
        self.assertEqual(qualcomm["params"][0], "adreno")

    def test_container_and_imagefs_refs(self):
        data = generate_execute_script(make_registry(), "generic", TS)["data"]
        self.assertEqual(data["container_id"], 500)
        self.assertEqual(list(data["container"])[0], "blurb")
        self.assertEqual(data["container"]["blurb"], "")
        self.assertIn("sub_data", data["container"])
        self.assertEqual(list(data["imagefs"]), [
            "display_name", "download_url", "file_md5", "file_name", "file_size", "id",
            "logo", "name", "version", "version_code",
        ])

    def test_execution_config_passthrough(self):
        data = generate_execute_script(make_registry(), "generic", TS)["data"]
        self.assertEqual(data["controller"],
                         {"dinput": True, "xinput": True, "xboxLayout": False, "vibration": True})
        self.assertEqual(data["translations"],
                         {"box64": {"BOX64_DYNAREC": "1"}, "fex": {"FEX_TSOENABLED": "1"}})
        self.assertEqual(data["video_memory"], 2048)

    def test_unknown_variant(self):
        with self.assertRaises(ValueError):
            generate_execute_script(make_registry(), "mali", TS)

    def test_generators_do_not_touch_registry(self):
        registry = make_registry()
        before = registry.get_all_components()
        generate_execute_script(registry, "generic", TS)
        generate_all_component_list(registry, TS)
        self.assertEqual(registry.get_all_components(), before)


if __name__ == "__main__":
    unittest.main()
