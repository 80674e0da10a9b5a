from __future__ import annotations

from hypothesis import given, strategies as st

from trivy_plugin.report import Report, flatten

result_strategy = st.fixed_dictionaries(
    {
        "Target": st.text(max_size=8),
        "Class": st.sampled_from(["os-pkgs", "lang-pkgs", "config", "secret"]),
    }
)
group_strategy = st.lists(st.lists(result_strategy, max_size=4), max_size=4)


def _aggregated(vulnerabilities, misconfigurations):
    return {
        "Vulnerabilities": [{"Results": results} for results in vulnerabilities],
        "Misconfigurations": [{"Results": results} for results in misconfigurations],
    }


@given(vulnerabilities=group_strategy, misconfigurations=group_strategy)
def test_flatten_is_ordered_concatenation(vulnerabilities, misconfigurations):
    flattened = flatten(_aggregated(vulnerabilities, misconfigurations))

    expected = [entry for group in vulnerabilities for entry in group]
    expected += [entry for group in misconfigurations for entry in group]
    assert flattened.results == expected


@given(vulnerabilities=group_strategy, misconfigurations=group_strategy)
def test_flatten_keeps_every_entry_object(vulnerabilities, misconfigurations):
    aggregated = _aggregated(vulnerabilities, misconfigurations)
    flattened = flatten(aggregated)

    sources = []
    for key in ("Vulnerabilities", "Misconfigurations"):
        for group in aggregated[key]:
            sources.extend(group["Results"])
    assert len(flattened.results) == len(sources)
    assert all(left is right for left, right in zip(flattened.results, sources))


def test_flatten_documented_order():
    r1, r2, r3, r4 = ({"ID": f"r{index}"} for index in range(1, 5))

    flattened = flatten(_aggregated([[r1, r2], [r3]], [[r4]]))

    assert flattened.results == [r1, r2, r3, r4]


def test_flatten_empty_groups():
    assert flatten({"Vulnerabilities": [], "Misconfigurations": []}) == Report(results=[])
    assert flatten({}) == Report(results=[])


def test_flatten_does_not_deduplicate():
    duplicate = {"ID": "CVE-1"}

    flattened = flatten(_aggregated([[duplicate]], [[duplicate]]))

    assert flattened.results == [duplicate, duplicate]
