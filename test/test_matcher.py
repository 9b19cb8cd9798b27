"""
Tests for the URL discovery
"""

from clipclean.matcher import (
    find_urls,
    is_single_url,
    parse_url,
    split_query,
    trim_url,
)


def urls(text):
    return [candidate.url for candidate in find_urls(text)]


def test_parse_url():
    candidate = parse_url('https://WWW.Example.com/a/b?x=1&Y=2&flag#frag')
    assert candidate.scheme == 'https'
    assert candidate.host == 'www.example.com'
    assert candidate.path == '/a/b'
    assert candidate.query == [('x', '1'), ('Y', '2'), ('flag', None)]
    assert candidate.fragment == 'frag'


def test_parse_url_no_query():
    candidate = parse_url('http://example.com')
    assert candidate.query == []
    assert candidate.fragment is None
    assert candidate.path == ''


def test_parse_url_failures():
    assert parse_url('https://') is None
    assert parse_url('https://[::1/path') is None
    assert parse_url('example.com/page') is None


def test_split_query():
    assert split_query('') == []
    assert split_query('a=1&&b=&c') == [('a', '1'), ('b', ''), ('c', None)]
    assert split_query('a=1=2') == [('a', '1=2')]


def test_positions():
    text = 'a https://example.com/x b http://example.org c'
    candidates = list(find_urls(text))
    assert [c.start for c in candidates] == [2, 26]
    for candidate in candidates:
        assert text[candidate.start:candidate.end] == candidate.url


def test_no_urls():
    assert urls('') == []
    assert urls('nothing to see here. Really!') == []
    assert urls('ftp://example.com/file?utm_source=a') == []
    assert urls('www.example.com/?utm_source=a') == []


def test_scheme_case():
    assert urls('HTTPS://EXAMPLE.COM/x') == ['HTTPS://EXAMPLE.COM/x']


def test_whitespace_and_delimiters():
    assert urls('https://a.com/x\nhttps://b.com/y') == [
        'https://a.com/x', 'https://b.com/y'
    ]
    assert urls('<https://a.com/x>') == ['https://a.com/x']
    assert urls('"https://a.com/x"') == ['https://a.com/x']
    assert urls('`https://a.com/x`') == ['https://a.com/x']


def test_trailing_punctuation():
    assert urls('See https://example.com/page.') == ['https://example.com/page']
    assert urls('https://example.com/page, and') == ['https://example.com/page']
    assert urls('Really https://example.com/?a=1?!') == ['https://example.com/?a=1']
    assert urls("'https://example.com/a'") == ['https://example.com/a']
    assert urls('https://example.com/a.html') == ['https://example.com/a.html']


def test_brackets():
    assert urls('(see https://example.com/a)') == ['https://example.com/a']
    assert urls('https://en.wikipedia.org/wiki/Foo_(bar)') == [
        'https://en.wikipedia.org/wiki/Foo_(bar)'
    ]
    assert urls('(https://en.wikipedia.org/wiki/Foo_(bar)).') == [
        'https://en.wikipedia.org/wiki/Foo_(bar)'
    ]
    assert urls('[https://example.com/a]') == ['https://example.com/a']


def test_trim_url():
    assert trim_url('https://a.com/x).;') == 'https://a.com/x'
    assert trim_url('https://a.com/(x)') == 'https://a.com/(x)'
    assert trim_url('') == ''


def test_unparsable_skipped():
    assert urls('broken https://[::1/x but https://ok.com/ fine') == [
        'https://ok.com/'
    ]
    assert urls('just https:// alone') == []


def test_is_single_url():
    assert is_single_url('https://example.com/page?si=1')
    assert is_single_url('  https://example.com/page\n')
    assert not is_single_url('look: https://example.com/page')
    assert not is_single_url('https://example.com/a https://example.com/b')
    assert not is_single_url('')
    assert not is_single_url('example.com')
    assert not is_single_url('https://')
