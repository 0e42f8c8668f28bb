"""Tests for the Streamlit app module."""

from contextlib import nullcontext
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from src.adapters.interface.streamlit import app
from src.domain.models import Account, EntryKind, LedgerEntry
from src.infrastructure.json_ledger_repository import JsonLedgerRepository
from src.infrastructure.settings import LedgerSettings


class _FakeColumn:
    def __init__(self, owner) -> None:
        self._owner = owner

    def metric(self, label, value):
        self._owner.metrics[label] = value

    def __enter__(self):
        return self

    def __exit__(self, *_exc):
        return False


class _FakeStreamlit:
    def __init__(self, inputs=None, submitted=()) -> None:
        self.inputs = inputs or {}
        self.submitted = set(submitted)
        self.metrics: dict[str, str] = {}
        self.dataframes = []
        self.errors: list[str] = []
        self.successes: list[str] = []
        self.downloads = []
        self.charts = []
        self.rerun_count = 0
        self.sidebar = SimpleNamespace(
            selectbox=self.selectbox,
            date_input=self.date_input,
        )

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text):
        self.title_text = text

    def subheader(self, _text):
        return None

    def info(self, _text):
        return None

    def warning(self, _text):
        return None

    def error(self, text):
        self.errors.append(text)

    def success(self, text):
        self.successes.append(text)

    def columns(self, count):
        return [_FakeColumn(self) for _ in range(count)]

    def metric(self, label, value):
        self.metrics[label] = value

    def altair_chart(self, chart, **kwargs):
        self.charts.append((chart, kwargs))

    def form(self, _key, **_kwargs):
        return nullcontext()

    def form_submit_button(self, label):
        return label in self.submitted

    def number_input(self, _label, **kwargs):
        return kwargs["value"]

    def text_input(self, label, value=""):
        return self.inputs.get(label, value)

    def selectbox(self, label, options, index=0, format_func=str):
        for option in options:
            format_func(option)
        return self.inputs.get(label, options[index])

    def date_input(self, label, value=None):
        return self.inputs.get(label, value)

    def dataframe(self, data, **kwargs):
        self.dataframes.append((data, kwargs))

    def checkbox(self, _label, key=None):
        return False

    def button(self, _label, disabled=False):
        return False

    def download_button(self, label, data, file_name, mime):
        self.downloads.append((label, data, file_name, mime))

    def file_uploader(self, _label, type=None):
        return None

    def rerun(self):
        self.rerun_count += 1


def _entry(entry_id: str, kind: EntryKind) -> LedgerEntry:
    return LedgerEntry(
        id=entry_id,
        kind=kind,
        description=f"Item {entry_id}",
        amount=Decimal("20"),
        quantity=1,
        account=Account.CASH_LOCAL,
        date=date(2024, 6, 1),
        created_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def repository(tmp_path, monkeypatch) -> JsonLedgerRepository:
    repository = JsonLedgerRepository(
        tmp_path / "ledger.json",
        logger=MagicMock(),
    )
    monkeypatch.setattr(app, "_get_repository", lambda: repository)
    monkeypatch.setattr(app, "build_settings", lambda: LedgerSettings())
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    return repository


def test_fetch_ledger_view_uses_cached_repository(repository) -> None:
    """_fetch_ledger_view should read the shared repository."""
    repository.save_entry(_entry("a", EntryKind.INCOME))

    view = app._fetch_ledger_view(app.LedgerViewSelection())

    assert [entry.id for entry in view.entries] == ["a"]


def test_main_renders_balances_tables_and_export(
    repository,
    monkeypatch,
) -> None:
    """main should render metrics, both entry tables and the backup."""
    repository.save_entry(_entry("in", EntryKind.INCOME))
    repository.save_entry(_entry("out", EntryKind.EXPENSE))
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)

    app.main()

    assert fake_st.title_text == "Cash Ledger"
    assert fake_st.metrics["Cash (local)"] == "Bs. 0.00"
    assert fake_st.metrics["Total Bs."] == "Bs. 0.00"
    assert len(fake_st.dataframes) == 2
    assert len(fake_st.charts) == 1
    assert '"in"' in fake_st.downloads[0][1]
    assert fake_st.errors == []


def test_main_records_submitted_entry(repository, monkeypatch) -> None:
    fake_st = _FakeStreamlit(
        inputs={"Description": "Bread", "Total amount": "12"},
        submitted={"Add entry"},
    )
    monkeypatch.setattr(app, "st", fake_st)

    app.main()

    [entry] = repository.list_entries()
    assert entry.description == "Bread"
    assert entry.amount == Decimal("12")
    assert fake_st.rerun_count == 1


def test_main_shows_validation_errors(repository, monkeypatch) -> None:
    fake_st = _FakeStreamlit(
        inputs={"Description": "Bread", "Total amount": "-1"},
        submitted={"Add entry"},
    )
    monkeypatch.setattr(app, "st", fake_st)

    app.main()

    assert repository.list_entries() == []
    assert len(fake_st.errors) == 1
    assert fake_st.rerun_count == 0
