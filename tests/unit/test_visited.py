import threading

from sitemap_crawler.visited import VisitedSet


def test_admit_is_exactly_once():
    visited = VisitedSet()

    assert visited.admit("https://example.com/") is True
    assert visited.admit("https://example.com/") is False
    assert len(visited) == 1
    assert "https://example.com/" in visited


def test_urls_keep_admission_order():
    visited = VisitedSet(["https://example.com/"])
    visited.admit("https://example.com/b")
    visited.admit("https://example.com/a")
    visited.admit("https://example.com/b")

    assert visited.urls() == [
        "https://example.com/",
        "https://example.com/b",
        "https://example.com/a",
    ]


def test_concurrent_admission_has_single_winner():
    visited = VisitedSet()
    barrier = threading.Barrier(16)
    winners = []
    winners_lock = threading.Lock()

    def contend():
        barrier.wait()
        for i in range(200):
            if visited.admit(f"https://example.com/{i}"):
                with winners_lock:
                    winners.append(i)

    threads = [threading.Thread(target=contend) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(winners) == list(range(200))
    assert len(visited.urls()) == 200
