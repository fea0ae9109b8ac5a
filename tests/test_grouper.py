"""Tests for canonical domain keys and grouping."""

import pytest

from pass_cleaner import Entry, Status, canonical_domain, decode_csv, group_by_domain, normalize_records


class TestCanonicalDomain:
    @pytest.mark.parametrize("url", [
        "https://Example.com/login",
        "http://www.example.com/",
        "example.com",
        "example.com/",
        "HTTPS://WWW.EXAMPLE.COM:443/account?next=/",
        "https://user@example.com/path",
        "  https://example.com  ",
    ])
    def test_variants_of_same_site(self, url):
        assert canonical_domain(url) == "example.com"

    def test_subdomains_kept(self):
        assert canonical_domain("https://accounts.google.com/signin") == "accounts.google.com"
        assert canonical_domain("https://www.mail.example.org") == "mail.example.org"

    def test_only_leading_www_removed(self):
        assert canonical_domain("https://www.www.example.com") == "www.example.com"
        assert canonical_domain("https://wwwexample.com") == "wwwexample.com"

    def test_empty(self):
        assert canonical_domain("") == ""
        assert canonical_domain(None) == ""

    def test_localhost_and_ip(self):
        assert canonical_domain("http://localhost:8080/admin") == "localhost"
        assert canonical_domain("http://192.168.1.1:8080/") == "192.168.1.1"
        assert canonical_domain("192.168.1.1") == "192.168.1.1"
        assert canonical_domain("http://[::1]:3000/") == "::1"

    @pytest.mark.parametrize("url", [
        "not a url",
        "Some Site",
        "http://[::1",
        "   ",
    ])
    def test_unparsable_keeps_raw_string(self, url):
        assert canonical_domain(url) == url

    @pytest.mark.parametrize("variant", [
        "http://intranet/",
        "http://Intranet",
        "intranet/login",
        "https://www.INTRANET:8443/",
    ])
    def test_dotless_host_variants(self, variant):
        assert canonical_domain(variant) == "intranet"

    @pytest.mark.parametrize("variant", [
        "https://café.example/login",
        "https://Café.example/",
        "CAFÉ.example",
    ])
    def test_internationalized_host_variants(self, variant):
        assert canonical_domain(variant) == "café.example"

    def test_scheme_only_url_uses_host_part(self):
        assert canonical_domain("chrome://settings") == "settings"

    def test_android_app_url(self):
        assert canonical_domain("android://abc123==@com.example.app/") == "com.example.app"


class TestGroupByDomain:
    def test_scenario_bank(self):
        entries = normalize_records(decode_csv(
            "name,url,username,password\n"
            "a,https://bank.com/x,u1,p1\n"
            "b,https://bank.com/x,u2,p2\n"
            "c,https://WWW.Bank.com,u3,p3\n"
        ))
        groups = group_by_domain(entries)
        assert len(groups) == 1
        assert groups[0].domain_key == "bank.com"
        assert [e.username for e in groups[0].entries] == ["u1", "u2", "u3"]
        assert all(e.status is Status.REVIEW for e in groups[0].entries)

    def test_order_of_first_occurrence(self, chrome_csv):
        groups = group_by_domain(normalize_records(decode_csv(chrome_csv)))
        assert [g.domain_key for g in groups] == ["bank.com", "example.com", ""]
        assert [e.username for e in groups[0].entries] == ["alice", "alice2", "carol"]
        assert [e.username for e in groups[1].entries] == ["bob", "bob"]

    def test_coverage(self, chrome_csv):
        rows = decode_csv(chrome_csv)
        entries = normalize_records(rows)
        groups = group_by_domain(entries)
        flattened = [e for g in groups for e in g.entries]
        assert len(flattened) == len(rows)
        assert sorted(map(repr, flattened)) == sorted(map(repr, entries))
        assert all(len(g) > 0 for g in groups)
        assert len({g.domain_key for g in groups}) == len(groups)

    def test_deterministic(self, chrome_csv):
        entries = normalize_records(decode_csv(chrome_csv))
        assert group_by_domain(entries) == group_by_domain(list(entries))

    def test_missing_url_column_groups_under_empty_key(self):
        entries = normalize_records(decode_csv("name,username\nx,u1\ny,u2\n"))
        groups = group_by_domain(entries)
        assert len(groups) == 1
        assert groups[0].domain_key == ""
        assert len(groups[0]) == 2

    def test_empty_url_rows_share_group(self):
        entries = [Entry(url=""), Entry(url="https://a.example"), Entry(url="")]
        groups = group_by_domain(entries)
        assert [(g.domain_key, len(g)) for g in groups] == [("", 2), ("a.example", 1)]

    def test_identical_unparsable_urls_share_group(self):
        entries = [Entry(url="not a url"), Entry(url="not a url"), Entry(url="Not a url")]
        groups = group_by_domain(entries)
        assert [(g.domain_key, len(g)) for g in groups] == [("not a url", 2), ("Not a url", 1)]

    def test_empty_input(self):
        assert group_by_domain([]) == ()

    def test_large_input(self):
        entries = [Entry(url=f"https://site{i % 10}.example/") for i in range(1500)]
        groups = group_by_domain(entries)
        assert len(groups) == 10
        assert sum(len(g) for g in groups) == 1500
