"""Tests for the ENI table and price list parsers."""

import pytest

from ekstrap.exceptions import MalformedRowWarning, ParseError
from ekstrap.resources.models import InstanceTypeRecord
from ekstrap.resources.parsers import (
    merge_pricing,
    parse_eni_table,
    parse_memory_mib,
    product_type_id,
)


class TestParseEniTable:
    """Tests for parse_eni_table."""

    def test_extracts_eni_and_ip_columns(self, eni_html) -> None:
        """Test type, ENI and IPv4 columns are read and IPv6 is ignored."""
        html = eni_html([["m5.large", "3", "10", "10"], ["m5.xlarge", "4", "15", "15"]])

        result = parse_eni_table(html)

        assert result == {
            "m5.large": {"eni": "3", "ip": "10"},
            "m5.xlarge": {"eni": "4", "ip": "15"},
        }

    def test_trims_whitespace(self, eni_html) -> None:
        """Test surrounding whitespace and newlines are stripped from cells."""
        html = eni_html([["\n  c5.large ", " 3\n", "  10  ", "10"]])

        result = parse_eni_table(html)

        assert result == {"c5.large": {"eni": "3", "ip": "10"}}

    def test_preserves_table_order(self, eni_html) -> None:
        """Test types come back in document order."""
        html = eni_html([["t3.nano", "2", "2", "2"], ["a1.large", "3", "10", "10"]])

        assert list(parse_eni_table(html)) == ["t3.nano", "a1.large"]

    def test_skips_header_and_empty_type_rows(self, eni_html, recwarn) -> None:
        """Test header rows and rows with an empty type cell are skipped silently."""
        html = eni_html([["", "", "", ""], ["m5.large", "3", "10", "10"]])

        result = parse_eni_table(html)

        assert list(result) == ["m5.large"]
        assert not [w for w in recwarn if issubclass(w.category, MalformedRowWarning)]

    def test_skips_malformed_row_with_warning(self, eni_html) -> None:
        """Test rows with fewer than three cells are skipped with a warning."""
        html = eni_html([["m5.large", "3", "10", "10"], ["x1.broken"]])

        with pytest.warns(MalformedRowWarning):
            result = parse_eni_table(html)

        assert "x1.broken" not in result
        assert list(result) == ["m5.large"]

    def test_row_with_three_cells_is_accepted(self, eni_html) -> None:
        """Test the IPv6 column is optional."""
        html = eni_html([["m4.large", "2", "10"]])

        assert parse_eni_table(html) == {"m4.large": {"eni": "2", "ip": "10"}}

    def test_reads_every_matching_table(self, eni_html) -> None:
        """Test rows from all tables under the selector are collected."""
        first = eni_html([["m5.large", "3", "10", "10"]])
        second = eni_html([["r5.large", "3", "10", "10"]])
        html = first.replace("</body></html>", "") + second.split("<body>", 1)[1]

        assert list(parse_eni_table(html)) == ["m5.large", "r5.large"]

    def test_missing_table_raises(self, eni_html) -> None:
        """Test a page without the limits table raises ParseError."""
        html = eni_html([["m5.large", "3", "10", "10"]], table_class="something-else")

        with pytest.raises(ParseError, match="No table"):
            parse_eni_table(html)


class TestParseMemoryMib:
    """Tests for parse_memory_mib."""

    def test_whole_gib(self) -> None:
        """Test a whole GiB value."""
        assert parse_memory_mib("16 GiB") == 16384

    def test_thousands_separator(self) -> None:
        """Test commas are stripped before conversion."""
        assert parse_memory_mib("1,952 GiB") == 1998848

    def test_fractional_gib(self) -> None:
        """Test fractional GiB values."""
        assert parse_memory_mib("0.5 GiB") == 512
        assert parse_memory_mib("15.25 GiB") == 15616

    def test_truncates_instead_of_rounding(self) -> None:
        """Test conversion truncates toward zero."""
        assert parse_memory_mib("0.613 GiB") == 627

    @pytest.mark.parametrize("memory", ["NA", "", None, "   "])
    def test_unparsable_returns_none(self, memory) -> None:
        """Test values without a leading number yield None."""
        assert parse_memory_mib(memory) is None

    @pytest.mark.parametrize("memory", ["nan GiB", "inf GiB", "-inf GiB"])
    def test_non_finite_returns_none(self, memory) -> None:
        """Test float spellings that cannot become an integer yield None."""
        assert parse_memory_mib(memory) is None


class TestProductTypeId:
    """Tests for product_type_id."""

    def test_compute_instance(self) -> None:
        """Test compute instances map to their instance type."""
        product = {"productFamily": "Compute Instance", "attributes": {"instanceType": "m5.large"}}
        assert product_type_id(product) == "m5.large"

    def test_dedicated_host(self) -> None:
        """Test dedicated hosts map to the metal type."""
        product = {"productFamily": "Dedicated Host", "attributes": {"instanceType": "i3"}}
        assert product_type_id(product) == "i3.metal"

    def test_other_family_ignored(self) -> None:
        """Test other product families are ignored."""
        product = {"productFamily": "Storage", "attributes": {"volumeType": "General Purpose"}}
        assert product_type_id(product) is None

    def test_null_attributes_ignored(self) -> None:
        """Test a product with null attributes is ignored."""
        product = {"productFamily": "Compute Instance", "attributes": None}
        assert product_type_id(product) is None


class TestMergePricing:
    """Tests for merge_pricing."""

    def test_sets_cpu_and_memory(self, pricing_document) -> None:
        """Test a matching compute instance enriches the record."""
        records = {"m5.large": InstanceTypeRecord("m5.large", eni_count=3, ip_count=10)}
        document = pricing_document([("Compute Instance", "m5.large", "2", "8 GiB")])

        merge_pricing(records, document)

        assert records["m5.large"].cpu_count == 2
        assert records["m5.large"].memory_mib == 8192

    def test_dedicated_host_merges_into_metal(self, pricing_document) -> None:
        """Test a dedicated host product updates the .metal record only."""
        records = {
            "i3": InstanceTypeRecord("i3", eni_count=1, ip_count=1),
            "i3.metal": InstanceTypeRecord("i3.metal", eni_count=15, ip_count=50),
        }
        document = pricing_document([("Dedicated Host", "i3", "72", "512 GiB")])

        merge_pricing(records, document)

        assert records["i3.metal"].cpu_count == 72
        assert records["i3.metal"].memory_mib == 524288
        assert records["i3"].cpu_count is None
        assert records["i3"].memory_mib is None

    def test_unmatched_products_are_dropped(self, pricing_document) -> None:
        """Test price list entries unknown to the ENI table add no records."""
        records = {"m5.large": InstanceTypeRecord("m5.large", eni_count=3, ip_count=10)}
        document = pricing_document([("Compute Instance", "zz9.huge", "4", "16 GiB")])

        merge_pricing(records, document)

        assert list(records) == ["m5.large"]
        assert records["m5.large"].cpu_count is None

    def test_other_families_do_not_merge(self, pricing_document) -> None:
        """Test products outside the two families are ignored."""
        records = {"m5.large": InstanceTypeRecord("m5.large", eni_count=3, ip_count=10)}
        document = pricing_document([("Storage Snapshot", "m5.large", "99", "1 GiB")])

        merge_pricing(records, document)

        assert records["m5.large"].cpu_count is None

    def test_non_integer_vcpu_leaves_cpu_unset(self, pricing_document) -> None:
        """Test an invalid vcpu attribute is ignored."""
        records = {"m5.large": InstanceTypeRecord("m5.large", eni_count=3, ip_count=10)}
        document = pricing_document([("Compute Instance", "m5.large", "NA", "8 GiB")])

        merge_pricing(records, document)

        assert records["m5.large"].cpu_count is None
        assert records["m5.large"].memory_mib == 8192

    def test_unparsable_memory_keeps_earlier_value(self, pricing_document) -> None:
        """Test a later product without usable memory does not erase a parsed value."""
        records = {"m6i.metal": InstanceTypeRecord("m6i.metal", eni_count=15, ip_count=50)}
        document = pricing_document(
            [
                ("Compute Instance", "m6i.metal", "128", "512 GiB"),
                ("Dedicated Host", "m6i", "NA", "NA"),
            ]
        )

        merge_pricing(records, document)

        assert records["m6i.metal"].cpu_count == 128
        assert records["m6i.metal"].memory_mib == 524288

    def test_null_attributes_product_is_skipped(self, pricing_document) -> None:
        """Test a product with null attributes does not abort the merge."""
        records = {"m5.large": InstanceTypeRecord("m5.large", eni_count=3, ip_count=10)}
        document = pricing_document([("Compute Instance", "m5.large", "2", "8 GiB")])
        document["products"]["BROKEN"] = {"productFamily": "Compute Instance", "attributes": None}

        merge_pricing(records, document)

        assert records["m5.large"].memory_mib == 8192

    def test_missing_products_raises(self) -> None:
        """Test a document without products raises ParseError."""
        with pytest.raises(ParseError, match="products"):
            merge_pricing({}, {"formatVersion": "v1.0"})

    def test_non_mapping_document_raises(self) -> None:
        """Test a document that is not an object raises ParseError."""
        with pytest.raises(ParseError):
            merge_pricing({}, ["products"])
