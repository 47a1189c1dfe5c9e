"""Extract GPS coordinates and camera details from JPEG EXIF data."""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path

from .reader import TYPE_SIZES, ByteReader, ParseAnomaly

logger = logging.getLogger(__name__)

# JPEG markers
SOI = 0xFFD8
APP1 = 0xFFE1
SOS = 0xFFDA
EOI = 0xFFD9
# Markers that carry no length field
STANDALONE_MARKERS = {0xFF01, *range(0xFFD0, 0xFFD8)}

EXIF_SIGNATURE = b"Exif\x00\x00"

# IFD0 tags
TAG_MAKE = 0x010F
TAG_MODEL = 0x0110
TAG_DATETIME = 0x0132
TAG_EXIF_IFD = 0x8769
TAG_GPS_IFD = 0x8825

# Exif sub-IFD tags
TAG_DATETIME_ORIGINAL = 0x9003

# GPS IFD tags
GPS_LATITUDE_REF = 0x0001
GPS_LATITUDE = 0x0002
GPS_LONGITUDE_REF = 0x0003
GPS_LONGITUDE = 0x0004

TYPE_RATIONAL = 5
TYPE_SRATIONAL = 10

IFD_ENTRY_SIZE = 12

IFD0_STRINGS = {
    TAG_MAKE: "make",
    TAG_MODEL: "model",
    TAG_DATETIME: "datetime",
}


@dataclass(frozen=True)
class IfdEntry:
    """One 12-byte directory entry, plus where it sits in the TIFF block."""

    tag: int
    type: int
    count: int
    value_offset: int
    position: int

    @property
    def byte_size(self) -> int:
        return self.count * TYPE_SIZES.get(self.type, 1)

    @property
    def value_position(self) -> int:
        """Offset of the value: inline in the entry when it fits in 4 bytes."""
        if self.byte_size <= 4:
            return self.position + 8
        return self.value_offset


@dataclass(frozen=True)
class ExifResult:
    """Best-effort EXIF data. Every field is optional."""

    latitude: float | None = None
    longitude: float | None = None
    timestamp: str | None = None
    make: str | None = None
    model: str | None = None

    @property
    def has_gps(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in asdict(self).values())

    def to_dict(self) -> dict:
        """Return the fields that were recovered, dropping unset ones."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    @classmethod
    def from_fields(cls, fields: dict) -> "ExifResult":
        """Assemble a result from the raw fields collected by the parse stages."""
        latitude = None
        if "latitude_dms" in fields:
            latitude = dms_to_decimal(fields["latitude_dms"], fields.get("latitude_ref"))

        longitude = None
        if "longitude_dms" in fields:
            longitude = dms_to_decimal(fields["longitude_dms"], fields.get("longitude_ref"))

        return cls(
            latitude=latitude,
            longitude=longitude,
            timestamp=fields.get("datetime_original") or fields.get("datetime"),
            make=fields.get("make"),
            model=fields.get("model"),
        )


@dataclass
class StageResult:
    """Fields recovered by one parse stage and the anomaly that stopped it, if any."""

    fields: dict = field(default_factory=dict)
    anomaly: ParseAnomaly | None = None

    @property
    def ok(self) -> bool:
        return self.anomaly is None


def rational_to_float(numerator: int, denominator: int) -> float:
    """Evaluate an EXIF rational. A zero denominator evaluates to 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def dms_to_decimal(dms: tuple[float, float, float], ref: str | None = None) -> float:
    """
    Convert degrees/minutes/seconds to signed decimal degrees.

    Args:
        dms: (degrees, minutes, seconds)
        ref: Hemisphere reference; "S" and "W" give a negative result

    Returns:
        Decimal degrees
    """
    degrees, minutes, seconds = dms
    decimal = degrees + minutes / 60 + seconds / 3600
    if ref in ("S", "W"):
        decimal = -decimal
    return decimal


def to_iso_timestamp(value: str | None) -> str | None:
    """Convert an EXIF "YYYY:MM:DD HH:MM:SS" timestamp to ISO 8601, if it parses."""
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y:%m:%d %H:%M:%S").isoformat()
    except ValueError:
        return value


def find_exif_block(data: bytes) -> bytes | None:
    """
    Walk the JPEG marker segments and return the TIFF block of the first EXIF APP1.

    The walk stops at Start-Of-Scan. A truncated APP1 segment yields whatever
    part of its payload is present.

    Args:
        data: Raw JPEG bytes

    Returns:
        TIFF bytes following the "Exif\\0\\0" signature, or None if there is
        no EXIF segment or the input is not a JPEG

    Raises:
        ParseAnomaly: If the marker walk hits corrupt segment framing
    """
    reader = ByteReader.big_endian(data)
    if len(reader) < 2 or reader.u16(0) != SOI:
        return None

    offset = 2
    while offset + 2 <= len(reader):
        if reader.u8(offset) != 0xFF:
            raise ParseAnomaly(f"Expected marker at offset {offset}", offset)

        marker = reader.u16(offset)
        if marker == 0xFFFF:
            # Fill byte before a marker
            offset += 1
            continue
        if marker in (SOS, EOI):
            return None
        if marker in STANDALONE_MARKERS:
            offset += 2
            continue

        length = reader.u16(offset + 2)
        if length < 2:
            raise ParseAnomaly(f"Invalid segment length {length}", offset)

        if marker == APP1:
            end = min(offset + 2 + length, len(reader))
            payload = reader.data[offset + 4 : end]
            if payload.startswith(EXIF_SIGNATURE):
                return payload[len(EXIF_SIGNATURE) :]

        offset += 2 + length

    return None


def iter_ifd_entries(reader: ByteReader, offset: int):
    """Yield the entries of the IFD at ``offset``. Only complete entries are yielded."""
    count = reader.u16(offset)
    for index in range(count):
        position = offset + 2 + index * IFD_ENTRY_SIZE
        reader.check(position, IFD_ENTRY_SIZE)
        yield IfdEntry(
            tag=reader.u16(position),
            type=reader.u16(position + 2),
            count=reader.u32(position + 4),
            value_offset=reader.u32(position + 8),
            position=position,
        )


def read_string(reader: ByteReader, entry: IfdEntry) -> str | None:
    raw = reader.bytes_at(entry.value_position, entry.count)
    text = raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace").strip()
    return text or None


def read_rational_triple(reader: ByteReader, entry: IfdEntry) -> tuple[float, float, float] | None:
    if entry.type not in (TYPE_RATIONAL, TYPE_SRATIONAL) or entry.count < 3:
        return None
    signed = entry.type == TYPE_SRATIONAL
    values = [
        rational_to_float(*reader.rational(entry.value_offset + 8 * index, signed))
        for index in range(3)
    ]
    return values[0], values[1], values[2]


def parse_gps_ifd(reader: ByteReader, offset: int) -> StageResult:
    """Read hemisphere references and DMS triples from the GPS IFD."""
    stage = StageResult()
    try:
        for entry in iter_ifd_entries(reader, offset):
            if entry.tag == GPS_LATITUDE_REF:
                ref = read_string(reader, entry)
                if ref:
                    stage.fields["latitude_ref"] = ref[0].upper()
            elif entry.tag == GPS_LONGITUDE_REF:
                ref = read_string(reader, entry)
                if ref:
                    stage.fields["longitude_ref"] = ref[0].upper()
            elif entry.tag == GPS_LATITUDE:
                dms = read_rational_triple(reader, entry)
                if dms is not None:
                    stage.fields["latitude_dms"] = dms
            elif entry.tag == GPS_LONGITUDE:
                dms = read_rational_triple(reader, entry)
                if dms is not None:
                    stage.fields["longitude_dms"] = dms
    except ParseAnomaly as anomaly:
        stage.anomaly = anomaly
    return stage


def parse_exif_ifd(reader: ByteReader, offset: int) -> StageResult:
    """Read the capture time from the Exif sub-IFD."""
    stage = StageResult()
    try:
        for entry in iter_ifd_entries(reader, offset):
            if entry.tag == TAG_DATETIME_ORIGINAL:
                value = read_string(reader, entry)
                if value:
                    stage.fields["datetime_original"] = value
    except ParseAnomaly as anomaly:
        stage.anomaly = anomaly
    return stage


def parse_ifd0(reader: ByteReader, offset: int) -> StageResult:
    """
    Read camera strings from IFD0 and follow its GPS and Exif pointers.

    Nested IFDs are parsed as soon as their pointer entry is reached. The
    first anomaly here or in the GPS IFD ends the walk, and the fields
    collected up to that point are kept. The Exif IFD only supplies the
    capture time, so an anomaly there is logged and the walk goes on.
    """
    stage = StageResult()
    followed = set()
    try:
        for entry in iter_ifd_entries(reader, offset):
            if entry.tag in IFD0_STRINGS:
                value = read_string(reader, entry)
                if value:
                    stage.fields[IFD0_STRINGS[entry.tag]] = value
            elif entry.tag in (TAG_GPS_IFD, TAG_EXIF_IFD) and entry.tag not in followed:
                followed.add(entry.tag)
                if entry.tag == TAG_EXIF_IFD:
                    nested = parse_exif_ifd(reader, entry.value_offset)
                    stage.fields.update(nested.fields)
                    if not nested.ok:
                        logger.debug("Skipping rest of Exif IFD: %s", nested.anomaly)
                    continue
                nested = parse_gps_ifd(reader, entry.value_offset)
                stage.fields.update(nested.fields)
                if not nested.ok:
                    stage.anomaly = nested.anomaly
                    return stage
    except ParseAnomaly as anomaly:
        stage.anomaly = anomaly
    return stage


def parse_tiff(tiff: bytes) -> StageResult:
    """Parse an EXIF TIFF block: byte-order mark, IFD0 offset, then IFD0 itself."""
    try:
        reader = ByteReader.from_byte_order_mark(tiff)
        ifd0_offset = reader.u32(4)
    except ParseAnomaly as anomaly:
        return StageResult(anomaly=anomaly)
    return parse_ifd0(reader, ifd0_offset)


def extract(data: bytes) -> ExifResult:
    """
    Extract GPS coordinates, capture time and camera make/model from JPEG bytes.

    Never raises. Input that is not a JPEG, has no EXIF segment, or is
    corrupt yields a result with the fields recovered before the problem
    (often none).

    Args:
        data: Raw image bytes

    Returns:
        ExifResult with every recovered field set
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        logger.debug("Ignoring non-bytes input of type %s", type(data).__name__)
        return ExifResult()

    try:
        tiff = find_exif_block(data)
    except ParseAnomaly as anomaly:
        logger.debug("JPEG segment walk stopped: %s", anomaly)
        return ExifResult()

    if tiff is None:
        return ExifResult()

    stage = parse_tiff(tiff)
    if not stage.ok:
        logger.debug("EXIF parse stopped early: %s", stage.anomaly)
    return ExifResult.from_fields(stage.fields)


def extract_from_path(image_path: str | Path) -> ExifResult:
    """Read an image file and extract its EXIF data. Unreadable files give an empty result."""
    try:
        data = Path(image_path).read_bytes()
    except OSError as e:
        logger.warning("Could not read image %s: %s", image_path, e)
        return ExifResult()
    return extract(data)
