import os

import yaml

from helpers import PLUGIN_DIR


def load_yaml(*parts):
    with open(os.path.join(PLUGIN_DIR, *parts), "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def test_manifest_has_required_fields():
    manifest = load_yaml("manifest.yaml")
    for key in [
        "author",
        "name",
        "type",
        "label",
        "description",
        "icon",
        "plugins",
        "resource",
        "version",
        "created_at",
    ]:
        assert key in manifest, f"manifest missing: {key}"
    runner = manifest.get("meta", {}).get("runner", {})
    assert runner.get("language") == "python"
    assert str(runner.get("version")).startswith("3.")
    assert runner.get("entrypoint") == "main"
    assert os.path.exists(os.path.join(PLUGIN_DIR, "main.py"))
    assert os.path.exists(os.path.join(PLUGIN_DIR, "_assets", manifest["icon"]))
    for rel in manifest["plugins"]["tools"]:
        assert os.path.exists(os.path.join(PLUGIN_DIR, rel)), f"provider yaml missing: {rel}"


def test_provider_and_tools_exist():
    provider = load_yaml("provider", "canvas_imagegen.yaml")
    assert os.path.exists(os.path.join(PLUGIN_DIR, provider["extra"]["python"]["source"]))
    tools = provider.get("tools", [])
    assert tools, "provider.tools should not be empty"
    for rel in tools:
        tool_path = os.path.join(PLUGIN_DIR, rel)
        assert os.path.exists(tool_path), f"tool yaml missing: {tool_path}"
        with open(tool_path, "r", encoding="utf-8") as f:
            tool = yaml.safe_load(f)
        assert os.path.exists(os.path.join(PLUGIN_DIR, tool["extra"]["python"]["source"]))
        desc = tool.get("description")
        assert isinstance(desc, dict) and "human" in desc and "llm" in desc


def test_credentials_defined_per_provider():
    provider = load_yaml("provider", "canvas_imagegen.yaml")
    creds = provider.get("credentials_for_provider", {})
    for name in ["google_api_key", "openrouter_api_key", "cometapi_api_key"]:
        assert name in creds, f"{name} credential should be defined"
        assert creds[name]["type"] == "secret-input"
        assert creds[name]["required"] is False


def test_provider_options_match_adapters():
    from canvas_bridge.providers import ADAPTERS

    for tool_file in ["generate_image.yaml", "list_models.yaml"]:
        tool = load_yaml("tools", tool_file)
        provider_param = next(p for p in tool["parameters"] if p["name"] == "provider")
        assert [o["value"] for o in provider_param["options"]] == list(ADAPTERS)


def test_count_parameter_bounds():
    tool = load_yaml("tools", "generate_image.yaml")
    count = next(p for p in tool["parameters"] if p["name"] == "count")
    assert count["min"] == 1
    assert count["max"] == 6
    assert count["default"] == 1
