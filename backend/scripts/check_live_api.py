"""Live end-to-end check of the QuakeGuide API against a running backend.

Exercises the same flow the mobile client does, via HTTP requests:
  1. Health check
  2. Knowledge listing, categories, sources and search
  3. Debug view (retrieval + priority + quick actions, no generation)
  4. Chat: a critical medical query and an off-topic query
  5. Chat with conversation history

Requires:
  - Backend running: cd backend && uvicorn quakeguide.main:app --reload --port 8000
  - Optional generation credentials in .env (OPENAI_API_KEY or
    HUGGINGFACE_TOKEN); without them the backend answers offline

Usage:
  python backend/scripts/check_live_api.py
  python backend/scripts/check_live_api.py --base-url http://192.168.1.20:8000
  python backend/scripts/check_live_api.py --skip-chat  # no generation calls
"""

import argparse
import sys
import time

import httpx

BASE = "http://localhost:8000"
PASS = "[PASS]"
FAIL = "[FAIL]"
SKIP = "[SKIP]"
INFO = "[INFO]"

# Counts
passed = 0
failed = 0
skipped = 0


def check(label: str, condition: bool, detail: str = ""):
    """Assert a condition and print result."""
    global passed, failed
    if condition:
        passed += 1
        print(f"  {PASS} {label}")
    else:
        failed += 1
        msg = f"  {FAIL} {label}"
        if detail:
            msg += f" -- {detail}"
        print(msg)
    return condition


def info(msg: str):
    print(f"  {INFO} {msg}")


def section(title: str):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


# ── Step functions ────────────────────────────────────────────────────


def _step0_health_check(client: httpx.Client, base: str):
    """Verify the backend is reachable."""
    section("Step 0: Health Check")
    try:
        r = client.get("/")
        check("Backend reachable", r.status_code == 200, f"status={r.status_code}")
    except httpx.ConnectError:
        print(f"  {FAIL} Cannot connect to {base}. Is the backend running?")
        print("    Start it: cd backend && uvicorn quakeguide.main:app --reload --port 8000")
        sys.exit(1)


def _step1_knowledge(client: httpx.Client):
    """List the knowledge base and its metadata."""
    section("Step 1: Knowledge Base")
    r = client.get("/api/knowledge")
    check("GET /api/knowledge returns 200", r.status_code == 200)
    items = r.json()
    check("Knowledge base is not empty", len(items) > 0, f"got {len(items)}")
    info(f"Found {len(items)} knowledge items")

    r = client.get("/api/knowledge/categories")
    check("GET categories returns 200", r.status_code == 200)
    categories = r.json()
    check("Every item has a known category", {i["category"] for i in items} <= set(categories))

    r = client.get("/api/knowledge/sources")
    check("GET sources returns 200", r.status_code == 200)
    for source in r.json():
        info(f"  Source: {source}")

    first_id = items[0]["id"]
    r = client.get(f"/api/knowledge/{first_id}")
    check(f"GET /api/knowledge/{first_id} returns 200", r.status_code == 200)
    r = client.get("/api/knowledge/does-not-exist")
    check("Unknown item returns 404", r.status_code == 404, f"status={r.status_code}")

    r = client.get("/api/knowledge/search", params={"q": "earthquake kit"})
    results = r.json()
    check("Search finds matches", len(results) > 0)
    for item in results:
        info(f"  [{item['id']}] {item['title']}")


def _step2_debug(client: httpx.Client):
    """Retrieval and classification without a generation call."""
    section("Step 2: Debug View")
    r = client.post("/api/chat/debug", json={"message": "I'm bleeding and need help"})
    check("POST /api/chat/debug returns 200", r.status_code == 200)
    data = r.json()
    check("Priority is critical", data.get("priority") == "critical", f"got: {data.get('priority')}")
    check(
        "Bleeding quick action suggested",
        "Apply direct pressure with clean cloth" in data.get("actions", []),
    )
    info(f"Top knowledge: {[i['id'] for i in data.get('search_results', [])]}")


def _chat(client: httpx.Client, message: str, history: list | None = None) -> dict:
    start = time.time()
    r = client.post("/api/chat", json={"message": message, "history": history or []})
    elapsed = time.time() - start
    check(f"POST /api/chat returns 200 ({message!r})", r.status_code == 200, f"status={r.status_code}")
    if r.status_code != 200:
        info(f"Response: {r.text[:500]}")
        _print_summary()
        sys.exit(1)
    data = r.json()
    info(f"Completed in {elapsed:.1f}s, status={data['status']}")
    validation = data.get("validation") or {}
    if validation:
        info(f"Confidence: {validation.get('confidence')} warnings={validation.get('warnings')}")
    return data


def _step3_chat(client: httpx.Client):
    """Full pipeline on a critical query and an off-topic query."""
    section("Step 3: Chat")
    info("Calling generation backend... this may take a few seconds")

    data = _chat(client, "I'm bleeding and need help")
    check("Answer is not empty", bool(data.get("answer")))
    check("Priority is critical", data["emergency_priority"] == "critical")
    check("Display text has critical banner", data["display_text"].startswith("🚨 CRITICAL: "))
    check("Knowledge was retrieved", data["relevant_knowledge_count"] > 0)
    info(f"Answer: {data['answer'][:120]}")

    data = _chat(client, "What's the weather today?")
    check("No knowledge for off-topic query", data["relevant_knowledge_count"] == 0)
    check("Priority is normal", data["emergency_priority"] == "normal")
    check("Answer is not empty", bool(data.get("answer")))
    check(
        "Blocked content never returned",
        (data.get("validation") or {}).get("blocked_content") is None,
    )
    info(f"Answer: {data['answer'][:120]}")


def _step4_history(client: httpx.Client):
    """Chat with earlier turns attached."""
    section("Step 4: Chat With History")
    history = [
        {"role": "user", "content": "There was just an earthquake"},
        {"role": "assistant", "content": "DROP, COVER, HOLD ON until the shaking stops."},
    ]
    data = _chat(client, "I'm trapped, what now?", history)
    check("Trapped quick action suggested", "Tap on pipes to signal rescuers" in data["quick_actions"])


# ── Orchestration ─────────────────────────────────────────────────────


def main():
    global skipped

    parser = argparse.ArgumentParser(description="Live API check")
    parser.add_argument(
        "--skip-chat", action="store_true",
        help="Only check knowledge and debug routes, don't call the generation backend",
    )
    parser.add_argument(
        "--base-url", default=BASE,
        help=f"Backend URL (default: {BASE})",
    )
    args = parser.parse_args()
    base = args.base_url.rstrip("/")

    client = httpx.Client(base_url=base, timeout=120.0)

    _step0_health_check(client, base)
    _step1_knowledge(client)
    _step2_debug(client)

    if args.skip_chat:
        section("Done (--skip-chat)")
        skipped += 2
        info("Skipping chat. Run without --skip-chat to test generation.")
        _print_summary()
        return

    _step3_chat(client)
    _step4_history(client)
    _print_summary()


def _print_summary():
    section("Summary")
    total = passed + failed + skipped
    print(f"  Passed:  {passed}")
    print(f"  Failed:  {failed}")
    print(f"  Skipped: {skipped}")
    print(f"  Total:   {total}")
    if failed:
        print("\n  Result: SOME CHECKS FAILED")
        sys.exit(1)
    else:
        print("\n  Result: ALL CHECKS PASSED")


if __name__ == "__main__":
    main()
