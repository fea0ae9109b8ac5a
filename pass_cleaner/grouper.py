"""Canonical domain keys and domain-based grouping of entries."""

from urllib.parse import urlsplit

from tqdm import tqdm

from pass_cleaner.models import Group

# Show a progress bar when grouping at least this many entries.
PROGRESS_THRESHOLD = 1000


def canonical_domain(url):
    """Return the grouping key for a login url.

    The key is the lower-cased host with a leading 'www.' removed, so
    'https://Example.com/login', 'http://www.example.com/' and
    'example.com' all map to 'example.com'. When no usable host can be
    extracted the raw url is returned unchanged, so identical unparsable
    strings still end up together. An empty url maps to ''.
    """
    if url is None:
        return ''
    url_str = str(url).strip()
    if not url_str:
        return url

    # Scheme-less values such as 'example.com/login' are read as an authority
    target = url_str if '://' in url_str else '//' + url_str
    try:
        host = urlsplit(target).hostname
    except ValueError:
        return url

    # Whitespace means the value was free text rather than an address
    if not host or any(c.isspace() for c in host):
        return url

    if host.startswith('www.'):
        host = host[4:]
    return host or url


def group_by_domain(entries, logger=None):
    """Cluster entries by canonical domain key.

    Groups are ordered by the first entry seen for each key; entries keep
    their input order inside a group. Returns a tuple of Group.
    """
    entries = list(entries)
    buckets = {}
    for entry in tqdm(
        entries,
        desc="Grouping by domain",
        disable=len(entries) < PROGRESS_THRESHOLD,
    ):
        buckets.setdefault(canonical_domain(entry.url), []).append(entry)

    groups = tuple(Group(domain_key=key, entries=tuple(members))
                   for key, members in buckets.items())

    if logger:
        shared = sum(1 for g in groups if len(g) > 1)
        logger.info(f"Grouped {len(entries)} entries into {len(groups)} domains "
                    f"({shared} with more than one entry)")
    return groups
