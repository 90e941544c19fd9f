from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from typing import Any

from novelmeta.infra.sessions import BaseResponse, BaseSession

BASE_URL = "https://youshu.me"
SEARCH_URL = BASE_URL + "/search/articlename/x/1.html"
DETAIL_URL = BASE_URL + "/book/12345"

SYNOPSIS = (
    "蒸汽与机械的浪潮中，谁能触及非凡？历史和黑暗的迷雾里，又是谁在耳语？"
    "我从诡秘中醒来，睁眼看见这个世界。"
)

Outcome = BaseResponse | Exception | Callable[[str], BaseResponse]


def page(
    html: str,
    *,
    url: str = "",
    status: int = 200,
    encoding: str = "gbk",
) -> BaseResponse:
    """Build a response the way a backend would hand it over."""
    return BaseResponse(
        content=html.encode(encoding),
        headers={"Content-Type": f"text/html; charset={encoding}"},
        status=status,
        url=url,
    )


class FakeSession(BaseSession):
    """Replays scripted outcomes and records every request."""

    def __init__(self, outcomes: Iterable[Outcome], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._outcomes = list(outcomes)
        self.calls: list[dict[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.initialized = False
        self.closed = False

    async def init(self, **kwargs: Any) -> None:
        self.initialized = True

    async def close(self) -> None:
        self.closed = True

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        allow_redirects: bool = True,
        **kwargs: Any,
    ) -> BaseResponse:
        self.calls.append(
            {
                "url": url,
                "timeout": timeout,
                "headers": dict(kwargs.get("headers") or {}),
            }
        )
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            outcome = self._outcomes.pop(0)
        finally:
            self.in_flight -= 1

        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(url)
        if not outcome.url:
            outcome.url = url
        return outcome


class SleepRecorder:
    """Stand-in for ``asyncio.sleep`` that returns immediately."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# -----------------------------------------------------------------------------
# Synthetic markup
# -----------------------------------------------------------------------------


def row(
    title: str,
    *,
    href: str = "/book/1",
    cover: str | None = "/cover/1.jpg",
    author: str | None = None,
    category: str | None = None,
    platform: str | None = None,
    words: str | None = None,
    description: str | None = None,
) -> str:
    pairs = [
        ("作者：", author),
        ("类别：", category),
        ("来源：", platform),
        ("字数：", words),
    ]
    tags = "".join(
        f'<span class="c_label">{label}</span><span class="c_value">{value}</span>'
        for label, value in pairs
        if value is not None
    )
    img = f'<div class="fl"><img src="{cover}"></div>' if cover else ""
    desc = (
        f'<div class="c_description">{description}</div>'
        if description is not None
        else ""
    )
    return (
        f'<div class="c_row">{img}'
        f'<div class="c_subject"><a href="{href}">{title}</a></div>'
        f'<div class="c_tag">{tags}</div>{desc}</div>'
    )


def listing(*rows: str) -> str:
    return (
        "<html><head><title>搜索结果_优书网</title></head><body>"
        '<div class="header"><a href="/">优书网</a></div>'
        f'<div class="c_list">{"".join(rows)}</div>'
        "</body></html>"
    )


def full_listing(count: int = 5) -> str:
    return listing(
        *(
            row(
                f"书名{i}",
                href=f"/book/{i}",
                cover=f"/cover/{i}.jpg",
                author=f"作者{i}",
                category="玄幻",
                platform="起点中文网",
                words=f"{i * 10},000",
                description=f"第{i}本书的简介",
            )
            for i in range(1, count + 1)
        )
    )


def detail_page(
    *,
    category_cell: str | None = "作品分类：玄幻",
    platform_cell: str | None = "首发网站：起点中文网",
    words_cell: str | None = "作品字数：446.5万",
) -> str:
    cells = "".join(
        f"<td>{c}</td>"
        for c in (category_cell, platform_cell, words_cell, "写作进度：完结")
        if c is not None
    )
    return f"""
<html><head>
<title>诡秘之主_爱潜水的乌贼_优书网</title>
<link rel="canonical" href="{DETAIL_URL}">
</head><body>
<div class="book-detail-img"><img src="https://youshu.me/cover/12345.jpg"></div>
<div style="font-size: 20px; font-weight: bold">《诡秘之主》</div>
<div class="author">作者：<a href="/author/7">爱潜水的乌贼</a></div>
<div class="tabvalue">
  <div>简介</div>
  <div>{SYNOPSIS}</div>
</div>
<div class="tabvalue"><table><tr>{cells}</tr></table></div>
</body></html>
"""


COMPACT_DETAIL_PAGE = f"""
<html><head>
<title>深空彼岸 - 辰东 - 优书网</title>
<meta property="og:image" content="//img.youshu.me/cover/777.jpg">
</head><body>
<h1 class="booktitle">深空彼岸</h1>
<p>作者：辰东</p>
<div class="booktag">起点中文网<i>|</i>都市<i>|</i>连载中<i>|</i>312.6万字</div>
<div class="intro">{SYNOPSIS}</div>
</body></html>
"""

META_ONLY_DETAIL_PAGE = """
<html><head>
<title>遮天 - 优书网</title>
<meta name="description" content="冰冷与黑暗并存的宇宙深处，九具庞大的龙尸拉着一口青铜古棺。">
</head><body><div class="main">无内容</div></body></html>
"""
