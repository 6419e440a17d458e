"""
Unit tests for the state store and its slices.
"""
from jobtracker.schemas.application import Application, Note
from jobtracker.schemas.chart_config import ChartConfig, OverviewCardConfig
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.preference import UserPreference
from jobtracker.state.slice import Action
from jobtracker.state.slices import applications, chart_configs, custom_fields, preferences
from jobtracker.state.store import RootState, create_store


def _chart(chart_id, order=1):
    return ChartConfig(
        id=chart_id,
        title=chart_id,
        chart_type="bar",
        data_source="applications-count",
        group_by="month",
        order=order,
    )


def _card(card_id, order=1):
    return OverviewCardConfig(id=card_id, title=card_id, data_source="total-applications", order=order)


def test_initial_state():
    state = create_store().get_state()

    assert isinstance(state, RootState)
    assert state.applications.items == ()
    assert state.custom_fields.fields == ()
    assert state.preferences.preferences == UserPreference()
    assert state.chart_configs.initialized is False


def test_action_creators_carry_namespaced_types():
    action = applications.set_loading(True)

    assert action == Action("applications/set_loading", True)
    assert applications.set_loading.type == "applications/set_loading"


def test_subscribers_notified_only_on_change():
    store = create_store()
    calls = []
    unsubscribe = store.subscribe(lambda: calls.append(store.get_state()))

    store.dispatch(Action("unknown/action"))
    assert calls == []

    store.dispatch(preferences.set_theme("dark"))
    assert len(calls) == 1
    assert calls[0].preferences.preferences.theme == "dark"

    unsubscribe()
    store.dispatch(preferences.set_theme("light"))
    assert len(calls) == 1


def test_snapshots_are_not_modified():
    store = create_store()
    before = store.get_state()

    store.dispatch(applications.add_application(Application(id="app-1")))

    assert before.applications.items == ()
    assert [app.id for app in store.get_state().applications.items] == ["app-1"]


def test_loading_and_error_flags():
    store = create_store()

    store.dispatch(applications.set_error("boom"))
    assert store.get_state().applications.error == "boom"

    store.dispatch(applications.set_loading(True))
    state = store.get_state().applications
    assert state.loading is True
    assert state.error is None

    store.dispatch(applications.set_error("again"))
    assert store.get_state().applications.loading is False


def test_application_and_note_reducers():
    store = create_store()
    store.dispatch(applications.set_applications([Application(id="app-1", data={"companyName": "Acme"})]))

    note = Note(id="note-1", content="first")
    store.dispatch(applications.add_note({"application_id": "app-1", "note": note, "now": "2024-01-01T00:00:00.000Z"}))
    app = store.get_state().applications.find("app-1")
    assert [n.id for n in app.notes] == ["note-1"]
    assert app.updated_at == "2024-01-01T00:00:00.000Z"

    store.dispatch(applications.update_note({
        "application_id": "app-1", "note_id": "note-1", "content": "edited", "now": "2024-01-02T00:00:00.000Z",
    }))
    edited = store.get_state().applications.find("app-1").notes[0]
    assert edited.content == "edited"
    assert edited.updated_at == "2024-01-02T00:00:00.000Z"

    store.dispatch(applications.delete_note({"application_id": "app-1", "note_id": "note-1"}))
    assert store.get_state().applications.find("app-1").notes == []

    store.dispatch(applications.update_application(Application(id="app-1", data={"companyName": "Acme Corp"})))
    assert store.get_state().applications.find("app-1").data == {"companyName": "Acme Corp"}

    store.dispatch(applications.delete_application("app-1"))
    assert store.get_state().applications.items == ()


def test_duplicate_or_orphan_notes_are_ignored():
    store = create_store()
    note = Note(id="note-1", content="first")
    store.dispatch(applications.set_applications([Application(id="app-1", notes=[note])]))
    before = store.get_state()

    store.dispatch(applications.add_note({"application_id": "app-1", "note": note}))
    store.dispatch(applications.add_note({"application_id": "missing", "note": Note(content="x")}))

    assert store.get_state() is before


def test_custom_field_reducers_keep_dense_order():
    store = create_store()
    store.dispatch(custom_fields.set_fields([
        CustomField(id="b", name="B", type="text", order=4),
        CustomField(id="a", name="A", type="text", order=1),
    ]))
    store.dispatch(custom_fields.add_field(CustomField(id="c", name="C", type="text", order=10)))

    fields = store.get_state().custom_fields.fields
    assert [(f.id, f.order) for f in fields] == [("a", 1), ("b", 2), ("c", 3)]

    store.dispatch(custom_fields.move_field_up("c"))
    store.dispatch(custom_fields.delete_field("a"))
    fields = store.get_state().custom_fields.fields
    assert [(f.id, f.order) for f in fields] == [("c", 1), ("b", 2)]

    store.dispatch(custom_fields.reorder_fields(["b", "c"]))
    assert [f.id for f in store.get_state().custom_fields.fields] == ["b", "c"]


def test_preferences_reducers():
    store = create_store()

    store.dispatch(preferences.set_default_pagination(50))
    store.dispatch(preferences.set_theme("system"))

    assert store.get_state().preferences.preferences == UserPreference(theme="system", default_pagination=50)


def test_initialize_configs_runs_once():
    store = create_store()

    store.dispatch(chart_configs.initialize_configs({"status_field_id": "status"}))
    state = store.get_state().chart_configs
    assert [c.id for c in state.charts] == ["default-apps-daily", "default-apps-monthly", "default-status-breakdown"]
    assert len(state.overview_cards) == 4

    store.dispatch(chart_configs.delete_chart("default-apps-daily"))
    store.dispatch(chart_configs.initialize_configs(None))
    assert len(store.get_state().chart_configs.charts) == 2


def test_chart_cap_and_renumbering():
    store = create_store()
    for index in range(1, 6):
        store.dispatch(chart_configs.add_chart(_chart(f"c{index}", order=index)))

    charts = store.get_state().chart_configs.charts
    assert [c.id for c in charts] == ["c1", "c2", "c3", "c4"]

    store.dispatch(chart_configs.delete_chart("c2"))
    charts = store.get_state().chart_configs.charts
    assert [(c.id, c.order) for c in charts] == [("c1", 1), ("c3", 2), ("c4", 3)]

    store.dispatch(chart_configs.move_chart_down("c1"))
    assert [c.id for c in store.get_state().chart_configs.charts] == ["c3", "c1", "c4"]

    before = store.get_state()
    store.dispatch(chart_configs.move_chart_up("c3"))
    assert store.get_state() is before


def test_overview_card_cap_and_reorder():
    store = create_store()
    for index in range(1, 6):
        store.dispatch(chart_configs.add_overview_card(_card(f"o{index}", order=index)))
    assert len(store.get_state().chart_configs.overview_cards) == 4

    cards = list(store.get_state().chart_configs.overview_cards)
    store.dispatch(chart_configs.reorder_overview_cards(list(reversed(cards))))
    cards = store.get_state().chart_configs.overview_cards
    assert [(c.id, c.order) for c in cards] == [("o4", 1), ("o3", 2), ("o2", 3), ("o1", 4)]


def test_chart_error_can_be_cleared():
    store = create_store()

    store.dispatch(chart_configs.set_error("Failed"))
    store.dispatch(chart_configs.clear_error())

    assert store.get_state().chart_configs.error is None


def test_added_charts_are_renumbered_densely():
    store = create_store()
    for chart_id, order in [("c1", 1), ("c2", 2), ("c3", 1), ("c4", 9)]:
        store.dispatch(chart_configs.add_chart(_chart(chart_id, order=order)))

    charts = store.get_state().chart_configs.charts
    assert [(c.id, c.order) for c in charts] == [("c1", 1), ("c3", 2), ("c2", 3), ("c4", 4)]


def test_duplicate_chart_and_card_ids_are_ignored():
    store = create_store()
    store.dispatch(chart_configs.add_chart(_chart("c1")))
    store.dispatch(chart_configs.add_overview_card(_card("o1")))
    before = store.get_state()

    store.dispatch(chart_configs.add_chart(_chart("c1", order=2)))
    store.dispatch(chart_configs.add_overview_card(_card("o1", order=2)))

    assert store.get_state() is before


def test_deleting_field_definition_keeps_application_values():
    store = create_store()
    store.dispatch(custom_fields.set_fields([
        CustomField(id="companyName", name="Company Name", type="text", order=1),
        CustomField(id="salary", name="Salary", type="number", order=2),
    ]))
    store.dispatch(applications.set_applications([
        Application(id="app-1", data={"companyName": "Acme", "salary": 85000}),
    ]))

    store.dispatch(custom_fields.delete_field("salary"))

    state = store.get_state()
    assert [f.id for f in state.custom_fields.fields] == ["companyName"]
    assert state.applications.find("app-1").data["salary"] == 85000
