from walkthrough.salvage import plan_bundle_is_empty
from walkthrough.salvage import salvage_categories
from walkthrough.salvage import salvage_plan_fields
from walkthrough.salvage import salvage_review_fields

BROKEN_PLAN = """{
  "title": "Shop \\"API\\" Review",
  "description": "ASP.NET service",
  "techStack": ["C#", "ASP.NET, Core", "SQL"],
  "categories": [
    {"name": "Controllers", "priority": 1, "description": "HTTP entry points",
     "files": [{"path": "Api/OrdersController.cs", "reason": "orders"}, {"reason": "no path"}]},
    {"name": "", "priority": 2, "files": [{"path": "ignored.cs"}]},
    {"name": "Workers", "priority": "soon", "files": []},
    {"name": "Startup", "priority": 3, "files": [{"path": "Program.cs", "reason": "boot" oops
"""


def test_salvage_plan_recovers_scalars_and_tech_stack() -> None:
    bundle = salvage_plan_fields(BROKEN_PLAN)
    assert bundle["title"] == 'Shop "API" Review'
    assert bundle["description"] == "ASP.NET service"
    assert bundle["techStack"] == ["C#", "ASP.NET, Core", "SQL"]


def test_salvage_categories_applies_discard_rule() -> None:
    categories = salvage_categories(BROKEN_PLAN)
    assert [category["name"] for category in categories] == ["Controllers", "Workers", "Startup"]

    controllers = categories[0]
    assert controllers["priority"] == 1
    assert controllers["description"] == "HTTP entry points"
    assert controllers["files"] == [{"path": "Api/OrdersController.cs", "reason": "orders"}]

    workers = categories[1]
    assert workers["priority"] == 0
    assert workers["description"] == ""
    assert workers["files"] == []

    startup = categories[2]
    assert startup["files"] == [{"path": "Program.cs", "reason": "boot"}]


def test_salvage_is_deterministic() -> None:
    assert salvage_plan_fields(BROKEN_PLAN) == salvage_plan_fields(BROKEN_PLAN)


def test_salvage_without_fields_is_empty() -> None:
    bundle = salvage_plan_fields("The model refused to answer.")
    assert bundle == {"title": "", "description": "", "techStack": [], "categories": []}
    assert plan_bundle_is_empty(bundle)
    assert not plan_bundle_is_empty({**bundle, "techStack": ["Go"]})


def test_salvage_review_methods() -> None:
    text = '{"methods": [{"name": "Run", "source": "App"}, {"source": "App"}, {"name": "Stop"'
    assert salvage_review_fields(text) == {
        "methods": [{"name": "Run", "source": "App"}, {"name": "Stop", "source": ""}]
    }
    assert salvage_review_fields("nothing here") == {"methods": []}


def test_salvage_overlong_priority_defaults_to_zero() -> None:
    text = '{"categories": [{"name": "Core" "priority": ' + "9" * 5000 + ', "files": []}]}'
    categories = salvage_categories(text)
    assert [(category["name"], category["priority"]) for category in categories] == [("Core", 0)]
