"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

SFCC_NS = "http://www.demandware.com/xml/impex/inventory/2007-05-31"

SFCC_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<inventory xmlns="{SFCC_NS}">
    <inventory-list>
        <header list-id="loc1">
            <description>loc1 location</description>
        </header>
        <records>
            <record product-id="A1">
                <allocation>5</allocation>
                <allocation-timestamp>2024-03-01T10:00:00.000Z</allocation-timestamp>
                <perpetual>false</perpetual>
                <preorder-backorder-handling>none</preorder-backorder-handling>
            </record>
            <record product-id="B2">
                <allocation>0</allocation>
                <allocation-timestamp>2024-03-01T10:00:00.000Z</allocation-timestamp>
                <perpetual>false</perpetual>
                <preorder-backorder-handling>backorder</preorder-backorder-handling>
                <preorder-backorder-allocation>7</preorder-backorder-allocation>
                <in-stock-date>2024-04-15</in-stock-date>
            </record>
            <record product-id="C3">
                <perpetual>true</perpetual>
            </record>
        </records>
    </inventory-list>
    <inventory-list>
        <header list-id="loc2">
            <description>loc2 location</description>
        </header>
        <records>
            <record product-id="B2">
                <allocation>3</allocation>
                <allocation-timestamp>2024-03-02T10:00:00.000Z</allocation-timestamp>
                <preorder-backorder-handling>preorder</preorder-backorder-handling>
                <preorder-backorder-allocation>4</preorder-backorder-allocation>
                <in-stock-datetime>2024-05-01T00:00:00.000Z</in-stock-datetime>
            </record>
            <record product-id="A1">
                <allocation>2</allocation>
                <allocation-timestamp>2024-03-02T10:00:00.000Z</allocation-timestamp>
            </record>
        </records>
    </inventory-list>
</inventory>
"""

SINGLE_RECORD_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<inventory xmlns="{SFCC_NS}">
    <inventory-list>
        <header list-id="loc1"/>
        <records>
            <record product-id="A1">
                <allocation>5</allocation>
            </record>
        </records>
    </inventory-list>
</inventory>
"""

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock returning 2024-01-02T03:04:05.678Z."""
    return lambda: FIXED_NOW


@pytest.fixture
def sfcc_file(tmp_path: Path) -> Path:
    """Two inventory lists, five records (one without allocation)."""
    path = tmp_path / "inventory.xml"
    path.write_text(SFCC_XML, encoding="utf-8")
    return path


@pytest.fixture
def single_record_file(tmp_path: Path) -> Path:
    path = tmp_path / "single.xml"
    path.write_text(SINGLE_RECORD_XML, encoding="utf-8")
    return path


@pytest.fixture
def oci_file(tmp_path: Path) -> Path:
    """Header line followed by one record with two futures."""
    path = tmp_path / "inventory.jsonl"
    path.write_text(
        '{"locationId":"loc1"}\n'
        '{"sku":"A1","onHand":3,"futures":[{"quantity":2,"expectedDate":"2024-01-01"},'
        '{"quantity":1,"expectedDate":"2024-02-01"}]}\n',
        encoding="utf-8",
    )
    return path
