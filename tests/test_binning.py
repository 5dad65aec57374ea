from bioactivity_graph.binning import bin_points, bucket_edges, histogram, max_bucket_count
from bioactivity_graph.loader import load_points
from bioactivity_graph.scales import LogScale, build_y_scale


def test_counts_sum_to_points_per_type(mixed_compound):
    points = load_points(mixed_compound["targetProteins"])
    y = build_y_scale(points, 320, top=40)
    bins = bin_points(points, y, 10)
    assert list(bins) == ["IC50", "Ki", "Kd"]
    for type_, buckets in bins.items():
        expected = sum(1 for p in points if p.activity_type == type_)
        assert sum(b.count for b in buckets) == expected


def test_edges_span_domain_and_use_ticks():
    y = LogScale(d0=10, d1=1000, r0=320, r1=0)
    edges = bucket_edges(y, 10)
    assert edges[0] == 10 and edges[-1] == 1000
    assert edges == sorted(edges)
    assert set(edges[1:-1]) <= set(y.ticks(10))


def test_bounds_go_to_upper_bucket_and_last_is_closed():
    buckets = histogram([10, 20, 1000], [10, 20, 100, 1000])
    assert [b.values for b in buckets] == [[10.0], [20.0], [1000.0]]


def test_values_outside_edges_dropped():
    buckets = histogram([1, 50, 5000], [10, 100, 1000])
    assert sum(b.count for b in buckets) == 1


def test_max_bucket_count(two_protein_compound):
    points = load_points(two_protein_compound["targetProteins"])
    y = build_y_scale(points, 320)
    bins = bin_points(points, y)
    assert max_bucket_count(bins) == 1
    assert max_bucket_count({}) == 0
