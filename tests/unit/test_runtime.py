"""Tests for request assembly, the middleware pipeline and status validation."""

import json
from datetime import UTC, date, datetime

import httpx
import pytest

from flotiq_client.configuration import Configuration
from flotiq_client.errors import FetchError, NotFoundError, ResponseError, ServerError
from flotiq_client.middleware import FetchParams, Middleware
from flotiq_client.runtime import BaseAPI, RequestContext, is_json_mime
from flotiq_client.transport.fetch import FormData


class CapturingFetch:
    """Fetch primitive recording every (url, init) and answering with a fixed response."""

    def __init__(self, response: httpx.Response | None = None):
        self.calls = []
        self.response = response if response is not None else httpx.Response(200, json={"ok": True})

    async def __call__(self, url, init):
        self.calls.append((url, init))
        return self.response

    @property
    def last_url(self):
        return self.calls[-1][0]

    @property
    def last_init(self):
        return self.calls[-1][1]


class FailingFetch:
    def __init__(self, error: BaseException):
        self.error = error
        self.calls = 0

    async def __call__(self, url, init):
        self.calls += 1
        raise self.error


def make_api(fetch, **parameters) -> BaseAPI:
    return BaseAPI(Configuration({"fetch_api": fetch, **parameters}))


class TestIsJsonMime:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "mime",
        [
            "application/json",
            "application/json; charset=UTF8",
            "APPLICATION/JSON",
            "application/vnd.company+json",
            "application/problem+json;charset=utf-8",
        ],
    )
    def test_json_mimes(self, mime):
        assert is_json_mime(mime)

    @pytest.mark.unit
    @pytest.mark.parametrize("mime", [None, "", "text/plain", "multipart/form-data", "application/jsonx"])
    def test_non_json_mimes(self, mime):
        assert not is_json_mime(mime)


class TestRequestAssembly:
    @pytest.mark.unit
    async def test_url_joins_base_path_path_and_query(self):
        fetch = CapturingFetch()
        api = make_api(fetch)

        await api.request(RequestContext(path="/api/v1/content/product", method="GET", query={"limit": 1}))

        assert fetch.last_url == "https://api.flotiq.com/api/v1/content/product?limit=1"

    @pytest.mark.unit
    async def test_empty_query_adds_no_question_mark(self):
        fetch = CapturingFetch()
        api = make_api(fetch, base_path="https://staging.example.com")

        await api.request(RequestContext(path="/api/v1/content/_tag", method="GET"))

        assert fetch.last_url == "https://staging.example.com/api/v1/content/_tag"

    @pytest.mark.unit
    async def test_query_serializing_to_nothing_adds_no_question_mark(self):
        fetch = CapturingFetch()
        api = make_api(fetch)

        await api.request(RequestContext(path="/x", method="GET", query={"filters": {}}))

        assert fetch.last_url == "https://api.flotiq.com/x"

    @pytest.mark.unit
    async def test_custom_query_serializer(self):
        fetch = CapturingFetch()
        api = make_api(fetch, query_params_stringify=lambda params: "custom=1")

        await api.request(RequestContext(path="/x", method="GET", query={"limit": 1}))

        assert fetch.last_url.endswith("/x?custom=1")

    @pytest.mark.unit
    async def test_headers_merge_and_drop_none(self):
        fetch = CapturingFetch()
        api = make_api(fetch, headers={"Accept": "application/json", "X-Default": "1", "X-Unset": None})

        await api.request(
            RequestContext(path="/x", method="GET", headers={"X-Default": "2", "X-AUTH-TOKEN": None, "X-Call": "c"})
        )

        assert fetch.last_init["headers"] == {"Accept": "application/json", "X-Default": "2", "X-Call": "c"}

    @pytest.mark.unit
    async def test_header_names_merge_case_insensitively(self):
        fetch = CapturingFetch()
        api = make_api(fetch, headers={"content-type": "text/plain", "x-auth-token": "stale"})

        await api.request(
            RequestContext(
                path="/x",
                method="POST",
                headers={"Content-Type": "application/json", "X-AUTH-TOKEN": None},
                body={"a": 1},
            )
        )

        assert fetch.last_init["headers"] == {"Content-Type": "application/json"}
        assert fetch.last_init["body"] == '{"a":1}'

    @pytest.mark.unit
    async def test_credentials_and_method_are_forwarded(self):
        fetch = CapturingFetch()
        api = make_api(fetch, credentials="include")

        await api.request(RequestContext(path="/x", method="DELETE"))

        assert fetch.last_init["method"] == "DELETE"
        assert fetch.last_init["credentials"] == "include"

    @pytest.mark.unit
    async def test_static_init_overrides(self):
        fetch = CapturingFetch()
        api = make_api(fetch)

        await api.request(RequestContext(path="/x", method="GET"), {"method": "HEAD", "headers": {"X-Over": "1"}})

        assert fetch.last_init["method"] == "HEAD"
        assert fetch.last_init["headers"] == {"X-Over": "1"}

    @pytest.mark.unit
    async def test_init_override_function_receives_init_and_context(self):
        fetch = CapturingFetch()
        api = make_api(fetch)
        seen = {}

        def override(init, context):
            seen["init"] = init
            seen["context"] = context
            return {"headers": {**init["headers"], "X-Request-Path": context.path}}

        context = RequestContext(path="/x", method="GET", headers={"A": "1"})
        await api.request(context, override)

        assert seen["context"] is context
        assert seen["init"]["method"] == "GET"
        assert fetch.last_init["headers"] == {"A": "1", "X-Request-Path": "/x"}

    @pytest.mark.unit
    async def test_async_init_override_function(self):
        fetch = CapturingFetch()
        api = make_api(fetch)

        async def override(init, context):
            return {"method": "PUT"}

        await api.request(RequestContext(path="/x", method="POST"), override)

        assert fetch.last_init["method"] == "PUT"


class TestBodySerialization:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "content_type",
        ["application/json", "Application/JSON; charset=utf-8", "application/vnd.flotiq+json"],
    )
    async def test_json_content_type_serializes_body(self, content_type):
        fetch = CapturingFetch()
        api = make_api(fetch)
        body = {"name": "Mug", "price": 12.5, "tags": ["a"]}

        await api.request(RequestContext(path="/x", method="POST", headers={"Content-Type": content_type}, body=body))

        assert isinstance(fetch.last_init["body"], str)
        assert json.loads(fetch.last_init["body"]) == body

    @pytest.mark.unit
    async def test_json_list_body(self):
        fetch = CapturingFetch()
        api = make_api(fetch)

        await api.request(
            RequestContext(path="/x", method="POST", headers={"Content-Type": "application/json"}, body=["a", "b"])
        )

        assert fetch.last_init["body"] == '["a","b"]'

    @pytest.mark.unit
    @pytest.mark.parametrize("body", [FormData(fields={"a": "1"}), b"\x00\x01", bytearray(b"raw")])
    async def test_multipart_and_binary_pass_through(self, body):
        fetch = CapturingFetch()
        api = make_api(fetch)

        await api.request(
            RequestContext(path="/x", method="POST", headers={"Content-Type": "application/json"}, body=body)
        )

        assert fetch.last_init["body"] is body

    @pytest.mark.unit
    async def test_non_json_content_type_passes_through(self):
        fetch = CapturingFetch()
        api = make_api(fetch)
        body = {"a": "1"}

        await api.request(
            RequestContext(
                path="/x", method="POST", headers={"Content-Type": "application/x-www-form-urlencoded"}, body=body
            )
        )

        assert fetch.last_init["body"] is body

    @pytest.mark.unit
    async def test_missing_body_stays_none(self):
        fetch = CapturingFetch()
        api = make_api(fetch)

        await api.request(RequestContext(path="/x", method="POST", headers={"Content-Type": "application/json"}))

        assert fetch.last_init["body"] is None

    @pytest.mark.unit
    async def test_overridden_body_is_serialized(self):
        fetch = CapturingFetch()
        api = make_api(fetch)

        await api.request(
            RequestContext(path="/x", method="POST", headers={"Content-Type": "application/json"}, body={"a": 1}),
            {"body": {"b": 2}},
        )

        assert fetch.last_init["body"] == '{"b":2}'

    @pytest.mark.unit
    async def test_dates_in_json_body_use_iso_strings(self):
        fetch = CapturingFetch()
        api = make_api(fetch)
        body = {"publishedAt": datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC), "day": date(2024, 1, 2)}

        await api.request(
            RequestContext(path="/x", method="POST", headers={"Content-Type": "application/json"}, body=body)
        )

        assert json.loads(fetch.last_init["body"]) == {
            "publishedAt": "2024-01-02T03:04:05.678Z",
            "day": "2024-01-02T00:00:00.000Z",
        }

    @pytest.mark.unit
    async def test_unserializable_json_body_raises(self):
        fetch = CapturingFetch()
        api = make_api(fetch)

        with pytest.raises(TypeError):
            await api.request(
                RequestContext(
                    path="/x", method="POST", headers={"Content-Type": "application/json"}, body={"a": object()}
                )
            )

        assert fetch.calls == []


class TestStatusValidation:
    @pytest.mark.unit
    @pytest.mark.parametrize("status_code", [200, 201, 204, 299])
    async def test_2xx_returns_response(self, status_code):
        response = httpx.Response(status_code)
        api = make_api(CapturingFetch(response))

        assert await api.request(RequestContext(path="/x", method="GET")) is response

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("status_code", "exc_class"), [(404, NotFoundError), (500, ServerError), (301, ResponseError)]
    )
    async def test_other_statuses_raise_response_error(self, status_code, exc_class):
        response = httpx.Response(status_code)
        api = make_api(CapturingFetch(response))

        with pytest.raises(exc_class) as exc_info:
            await api.request(RequestContext(path="/x", method="GET"))

        assert isinstance(exc_info.value, ResponseError)
        assert exc_info.value.response is response
        assert str(exc_info.value) == "Response returned an error code"


class TestPreMiddleware:
    @pytest.mark.unit
    async def test_pre_hooks_chain_left_to_right(self):
        fetch = CapturingFetch()
        seen_by_b = []

        def pre_a(ctx):
            return FetchParams(url=ctx.url + "?from=a", init={**ctx.init, "method": "PATCH"})

        async def pre_b(ctx):
            seen_by_b.append((ctx.url, ctx.init["method"]))
            return FetchParams(url=ctx.url + "&from=b", init=ctx.init)

        api = make_api(fetch).with_pre_middleware(pre_a, pre_b)
        await api.request(RequestContext(path="/x", method="GET"))

        assert seen_by_b == [("https://api.flotiq.com/x?from=a", "PATCH")]
        assert fetch.last_url == "https://api.flotiq.com/x?from=a&from=b"
        assert fetch.last_init["method"] == "PATCH"

    @pytest.mark.unit
    async def test_pre_hook_returning_none_keeps_params(self):
        fetch = CapturingFetch()
        api = make_api(fetch).with_pre_middleware(lambda ctx: None)

        await api.request(RequestContext(path="/x", method="GET"))

        assert fetch.last_url == "https://api.flotiq.com/x"

    @pytest.mark.unit
    async def test_hooks_can_issue_requests_through_fetch(self):
        fetch = CapturingFetch()

        async def refresh_token(ctx):
            if ctx.url.endswith("/token"):
                return None
            await ctx.fetch("https://api.flotiq.com/token", {"method": "POST"})
            return None

        api = make_api(fetch).with_pre_middleware(refresh_token)
        await api.request(RequestContext(path="/x", method="GET"))

        assert [url for url, _ in fetch.calls] == ["https://api.flotiq.com/token", "https://api.flotiq.com/x"]

    @pytest.mark.unit
    async def test_configuration_middleware_applies(self):
        fetch = CapturingFetch()
        middleware = Middleware(pre=lambda ctx: FetchParams(url=ctx.url + "?configured=1", init=ctx.init))
        api = make_api(fetch, middleware=[middleware])

        await api.request(RequestContext(path="/x", method="GET"))

        assert fetch.last_url.endswith("?configured=1")


class TestPostMiddleware:
    @pytest.mark.unit
    async def test_post_hook_receives_a_copy(self):
        original = httpx.Response(200, json={"n": 1})
        received = []

        def post(ctx):
            received.append(ctx.response)
            return None

        api = make_api(CapturingFetch(original)).with_post_middleware(post)
        response = await api.request(RequestContext(path="/x", method="GET"))

        assert response is original
        assert received[0] is not original
        assert received[0].json() == {"n": 1}

    @pytest.mark.unit
    async def test_post_hooks_chain_substitutes(self):
        def first(ctx):
            return httpx.Response(200, json={"n": ctx.response.json()["n"] + 1})

        async def second(ctx):
            return httpx.Response(201, json={"n": ctx.response.json()["n"] * 10})

        api = make_api(CapturingFetch(httpx.Response(200, json={"n": 1}))).with_post_middleware(first, second)
        response = await api.request(RequestContext(path="/x", method="GET"))

        assert response.status_code == 201
        assert response.json() == {"n": 20}

    @pytest.mark.unit
    async def test_post_substitute_is_status_checked(self):
        api = make_api(CapturingFetch()).with_post_middleware(lambda ctx: httpx.Response(404))

        with pytest.raises(NotFoundError):
            await api.request(RequestContext(path="/x", method="GET"))


class TestErrorMiddleware:
    @pytest.mark.unit
    async def test_unrecovered_error_is_wrapped_in_fetch_error(self):
        cause = httpx.ConnectError("connection refused")
        api = make_api(FailingFetch(cause))

        with pytest.raises(FetchError) as exc_info:
            await api.request(RequestContext(path="/x", method="GET"))

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause

    @pytest.mark.unit
    async def test_error_hook_returning_none_still_raises(self):
        seen = []
        api = make_api(FailingFetch(ConnectionError("down"))).with_middleware(
            Middleware(on_error=lambda ctx: seen.append(ctx.error))
        )

        with pytest.raises(FetchError):
            await api.request(RequestContext(path="/x", method="GET"))

        assert len(seen) == 1

    @pytest.mark.unit
    async def test_error_hook_recovers_and_post_hooks_run(self):
        post_seen = []
        recovered = httpx.Response(200, json={"cached": True})
        api = make_api(FailingFetch(ConnectionError("down"))).with_middleware(
            Middleware(on_error=lambda ctx: recovered),
            Middleware(post=lambda ctx: post_seen.append(ctx.response.json())),
        )

        response = await api.request(RequestContext(path="/x", method="GET"))

        assert response is recovered
        assert post_seen == [{"cached": True}]

    @pytest.mark.unit
    async def test_error_hooks_see_original_error_and_previous_substitute(self):
        error = ConnectionError("down")
        first_substitute = httpx.Response(200, json={"from": "first"})
        seen = []

        def first(ctx):
            seen.append((ctx.error, ctx.response))
            return first_substitute

        async def second(ctx):
            seen.append((ctx.error, ctx.response))
            return None

        api = make_api(FailingFetch(error)).with_middleware(Middleware(on_error=first), Middleware(on_error=second))
        response = await api.request(RequestContext(path="/x", method="GET"))

        assert response is first_substitute
        assert seen[0] == (error, None)
        assert seen[1][0] is error
        assert seen[1][1] is not first_substitute
        assert seen[1][1].json() == {"from": "first"}

    @pytest.mark.unit
    async def test_base_exceptions_propagate_unchanged(self):
        class Abort(BaseException):
            pass

        hook_calls = []
        api = make_api(FailingFetch(Abort())).with_middleware(Middleware(on_error=hook_calls.append))

        with pytest.raises(Abort):
            await api.request(RequestContext(path="/x", method="GET"))

        assert hook_calls == []


class TestClientExtension:
    @pytest.mark.unit
    def test_with_middleware_returns_new_client(self):
        api = make_api(CapturingFetch())
        middleware = Middleware(pre=lambda ctx: None)

        extended = api.with_middleware(middleware)

        assert extended is not api
        assert type(extended) is type(api)
        assert extended.configuration is api.configuration
        assert api.middleware == []
        assert extended.middleware == [middleware]

    @pytest.mark.unit
    def test_with_pre_and_post_middleware_wrap_functions(self):
        def pre(ctx):
            return None

        def post(ctx):
            return None

        api = make_api(CapturingFetch()).with_pre_middleware(pre).with_post_middleware(post)

        assert api.middleware == [Middleware(pre=pre), Middleware(post=post)]

    @pytest.mark.unit
    async def test_sibling_clients_are_independent(self):
        fetch = CapturingFetch()
        base = make_api(fetch)
        sibling = base.with_middleware(Middleware(post=lambda ctx: None))

        branched = sibling.with_pre_middleware(lambda ctx: FetchParams(url=ctx.url + "?branched=1", init=ctx.init))
        await sibling.request(RequestContext(path="/x", method="GET"))

        assert fetch.last_url == "https://api.flotiq.com/x"
        assert len(sibling.middleware) == 1
        assert len(branched.middleware) == 2

    @pytest.mark.unit
    def test_configuration_middleware_list_is_not_mutated(self):
        configured = [Middleware(pre=lambda ctx: None)]
        api = make_api(CapturingFetch(), middleware=configured)

        api.with_middleware(Middleware(post=lambda ctx: None))
        api.middleware.append(Middleware())

        assert len(configured) == 1
