"""
Tests for the removal of the parameters of a single URL
"""

from clipclean.filters import filter_url, find_host_rule, render_url
from clipclean.matcher import parse_url
from clipclean.rules import DEFAULT_RULES, Rule, RuleTable

from conftest import disable


def clean(url, table):
    result = filter_url(parse_url(url), table)
    if result is None:
        return None
    return result.url, result.service


def test_host_rule(table):
    assert clean('https://youtu.be/dQw4w9WgXcQ?si=abc123', table) == (
        'https://youtu.be/dQw4w9WgXcQ', 'YouTube')


def test_host_rule_keeps_other_params(table):
    assert clean('https://www.youtube.com/watch?v=abc&si=xyz&t=42', table) == (
        'https://www.youtube.com/watch?v=abc&t=42', 'YouTube')


def test_order_preserved(table):
    url = 'https://example.com/?a=1&utm_source=x&b=2&fbclid=y&c=3'
    assert clean(url, table)[0] == 'https://example.com/?a=1&b=2&c=3'


def test_no_dangling_separator(table):
    url, _ = clean('https://example.com/page?utm_source=a&utm_medium=b', table)
    assert url == 'https://example.com/page'
    assert '?' not in url


def test_fragment_kept(table):
    assert clean('https://example.com/p?utm_source=x#section', table)[0] == \
        'https://example.com/p#section'
    assert clean('https://example.com/p?a=1&utm_source=x#s', table)[0] == \
        'https://example.com/p?a=1#s'


def test_case_insensitive_names(table):
    assert clean('https://youtu.be/x?SI=1&Utm_Source=2', table)[0] == \
        'https://youtu.be/x'


def test_encoded_names(table):
    assert clean('https://example.com/?utm%5Fsource=a&q=b', table)[0] == \
        'https://example.com/?q=b'


def test_values_not_reencoded(table):
    url = 'https://example.com/s?q=caf%C3%A9+au+lait&x=%2F&fbclid=1'
    assert clean(url, table)[0] == \
        'https://example.com/s?q=caf%C3%A9+au+lait&x=%2F'


def test_params_without_value(table):
    assert clean('https://example.com/?flag&utm_source=x&empty=', table)[0] == \
        'https://example.com/?flag&empty='


def test_no_query(table):
    assert clean('https://example.com/page', table) is None
    assert clean('https://youtu.be/x', table) is None
    assert clean('https://amazon.de/dp/B0', table) is None


def test_host_rule_nothing_to_remove(table):
    assert clean('https://youtu.be/x?t=10', table) is None


def test_universal_only(config_obj, table):
    disable(config_obj, 'youtube', 'spotify', 'instagram', 'amazon', 'utm')
    assert clean('https://example.com/page?fbclid=abc123', table) == (
        'https://example.com/page', 'Click identifiers')


def test_universal_service_first_contributor(table):
    assert clean('https://example.com/?fbclid=1&utm_source=2', table)[1] == \
        'UTM parameters'
    assert clean('https://example.com/?fbclid=1', table)[1] == \
        'Click identifiers'


def test_host_rule_gets_the_credit(table):
    assert clean('https://youtu.be/x?utm_source=a', table) == (
        'https://youtu.be/x', 'YouTube')


def test_combination(table):
    url = 'https://open.spotify.com/track/abc123?si=def456&utm_source=copy'
    assert clean(url, table) == (
        'https://open.spotify.com/track/abc123', 'Spotify')


def test_combination_disabled_universal(config_obj, table):
    disable(config_obj, 'utm')
    url = 'https://open.spotify.com/track/abc123?si=def456&utm_source=copy'
    assert clean(url, table) == (
        'https://open.spotify.com/track/abc123?utm_source=copy', 'Spotify')


def test_remove_all(table):
    url = 'https://amazon.de/gp/product/B08N5WRWNW?pf_rd_p=abc&linkCode=xyz'
    assert clean(url, table) == (
        'https://amazon.de/gp/product/B08N5WRWNW', 'Amazon')


def test_remove_all_ignores_universal_state(config_obj, table):
    disable(config_obj, 'utm', 'clickid')
    url = 'https://www.amazon.co.uk/dp/B0?th=1&utm_source=x#reviews'
    assert clean(url, table) == ('https://www.amazon.co.uk/dp/B0#reviews',
                                 'Amazon')


def test_disabled_host_rule(config_obj, table):
    disable(config_obj, 'youtube')
    assert clean('https://youtube.com/watch?v=abc&si=xyz', table) is None
    assert clean('https://youtube.com/watch?v=abc&si=xyz&utm_source=a',
                 table) == ('https://youtube.com/watch?v=abc&si=xyz',
                            'UTM parameters')


def test_everything_disabled(config_obj, table):
    disable(config_obj, *[rule.id for rule in DEFAULT_RULES])
    assert clean('https://youtu.be/x?si=1&utm_source=2', table) is None


def test_lookalike_host(table):
    assert clean('https://notyoutube.com/?si=1', table) is None


def test_first_host_rule_wins():
    rules = [
        Rule(id='first', name='First', hosts=frozenset({'example.com'}),
             tracking_params=frozenset({'a'})),
        Rule(id='second', name='Second', hosts=frozenset({'www.example.com'}),
             tracking_params=frozenset({'b'})),
    ]
    table = RuleTable(rules)
    assert find_host_rule('www.example.com', table).id == 'first'
    assert clean('https://www.example.com/?a=1&b=2', table) == (
        'https://www.example.com/?b=2', 'First')


def test_disabled_host_rule_falls_through():
    rules = [
        Rule(id='first', name='First', hosts=frozenset({'example.com'}),
             tracking_params=frozenset({'a'}), default_enabled=False),
        Rule(id='second', name='Second', hosts=frozenset({'example.com'}),
             tracking_params=frozenset({'b'})),
    ]
    table = RuleTable(rules)
    assert clean('https://example.com/?a=1&b=2', table) == (
        'https://example.com/?a=1', 'Second')


def test_render_url():
    candidate = parse_url('https://example.com/p?a=1&b#f')
    assert render_url(candidate, []) == 'https://example.com/p#f'
    assert render_url(candidate, [('b', None)]) == 'https://example.com/p?b#f'
