"""Test fixtures for bluectl tests."""

import pytest

from bluectl.api.client import BluOSClient
from bluectl.api.document import DocumentNode, parse_document
from bluectl.api.protocol import NetworkError
from bluectl.api.transport import Transport
from bluectl.models.endpoint import Endpoint

STATUS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<status etag="4e266c9fbfba6d13d1a4d6ff4bd2c1e6">
  <album>Abbey Road</album>
  <artist>The Beatles</artist>
  <image>/Artwork?service=LocalMusic&amp;album=Abbey+Road</image>
  <state>pause</state>
  <title1>Radio</title1>
  <title2>Show</title2>
  <volume>37</volume>
  <secs>93</secs>
  <mute/>
</status>
"""

SYNC_STATUS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<SyncStatus icon="/images/players/N125_nt.png" volume="37" modelName="NODE 2i"
    name="Kitchen" model="N130" brand="Bluesound" etag="707" schemaVersion="34"
    syncStat="707" id="10.0.0.5:11000" mac="90:56:82:9F:01:02">
  <bluetoothOutput/>
</SyncStatus>
"""

PRESETS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<presets prid="2">
  <preset url="TuneIn:s24896" id="1" name="Radio Paradise" image="/a.png"/>
  <preset url="TuneIn:s17077" id="2" name="BBC Radio 6 Music" image="/b.png"/>
</presets>
"""


def albums_xml(*albums: tuple[str, str]) -> str:
    """Return an Albums section reply holding the given (artist, title) pairs."""
    items = "".join(
        f"<album><art>{artist}</art><title>{title}</title></album>" for artist, title in albums
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<albums service="LocalMusic"><sections><section name="x">{items}</section>'
        "</sections></albums>"
    )


class FakeTransport(Transport):
    """Transport that answers from canned bodies and records requested paths."""

    def __init__(self, replies: dict[str, str] | None = None) -> None:
        super().__init__(Endpoint("10.0.0.5"))
        self.replies: dict[str, str] = dict(replies or {})
        self.requests: list[str] = []
        self.fail_on: set[str] = set()

    def fetch(self, path: str) -> list[DocumentNode]:
        self.requests.append(path)
        if path in self.fail_on:
            raise NetworkError(f"boom: {path}")
        return parse_document(self.replies.get(path, ""))


@pytest.fixture
def transport() -> FakeTransport:
    """Return a FakeTransport with status, identity and presets replies."""
    return FakeTransport(
        {
            "Status": STATUS_XML,
            "SyncStatus": SYNC_STATUS_XML,
            "Presets": PRESETS_XML,
        }
    )


@pytest.fixture
def client(transport: FakeTransport) -> BluOSClient:
    """Return a BluOSClient wired to the fake transport."""
    return BluOSClient(transport.endpoint, transport=transport)
