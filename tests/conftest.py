import pytest

from locsheet.schemas.text import Dataset, Namespace, Record, TranslationUnit


def make_record(
    key: str,
    texts: dict[str, str],
    path: str = "",
    source: str | None = None,
) -> Record:
    """Record whose source defaults to the first culture's text.

    Its namespace is filled in by the owning :class:`Namespace`.
    """
    first = next(iter(texts.values()))
    return Record(
        key=key,
        source=first if source is None else source,
        path=path,
        translations=[
            TranslationUnit(culture=c, text=t) for c, t in texts.items()
        ],
    )


@pytest.fixture
def menu_dataset() -> Dataset:
    """en/de dataset with one record: Menu,Start."""
    return Dataset(
        namespaces=[
            Namespace(
                name="Menu",
                children=[
                    make_record(
                        "Start",
                        {"en": "Start Game", "de": "Spiel Starten"},
                        path="Menu.cs",
                    ),
                ],
            ),
        ],
        cultures=["en", "de"],
        native_culture="en",
    )


@pytest.fixture
def game_dataset() -> Dataset:
    """Three cultures, several namespaces, a repeated namespace run,
    multi-line text and an untranslated cell."""
    cultures = ["en", "de", "fr"]

    def ns(name: str, *records: Record) -> Namespace:
        return Namespace(name=name, children=list(records))

    return Dataset(
        namespaces=[
            ns(
                "Menu",
                make_record("Start", {"en": "Start", "de": "Starten", "fr": "Démarrer"}, "Menu.cs"),
                make_record("Quit", {"en": "Quit", "de": "Beenden", "fr": ""}, "Menu.cs"),
            ),
            ns(
                "Dialog.Intro",
                make_record(
                    "Line1",
                    {"en": "Hello\r\nTraveller", "de": "Hallo\r\nReisender", "fr": "Bonjour\r\nVoyageur"},
                    "Intro.cs:12",
                ),
            ),
            ns(
                "Menu",
                make_record("Options", {"en": "Options", "de": "Optionen", "fr": "Options"}, "Options.cs"),
            ),
        ],
        cultures=cultures,
        native_culture="en",
    )


@pytest.fixture
def created_menu_dataset() -> Dataset:
    """The en/de menu dataset built through ``Record.create``."""
    record = Record.create("Start", ["en", "de"], source="Start Game", path="Menu.cs")
    record.set_text("en", "Start Game")
    record.set_text("de", "Spiel Starten")
    return Dataset(
        namespaces=[Namespace(name="Menu", children=[record])],
        cultures=["en", "de"],
        native_culture="en",
    )
