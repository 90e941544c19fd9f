import logging
import re
from dataclasses import dataclass

from novelmeta.libs.fields import (
    RawFieldTable,
    extract_labeled_value,
    parse_word_count,
    pick_field,
    scan_label_value_fields,
)
from novelmeta.libs.html import Node, xclass
from novelmeta.plugins.base.errors import ExtractionAmbiguity
from novelmeta.plugins.base.parser import BaseParser
from novelmeta.plugins.registry import hub
from novelmeta.schemas import (
    DEFAULT_AUTHOR,
    DEFAULT_DESCRIPTION,
    DetailMeta,
    RawPage,
    SearchRecord,
)

from .classifier import (
    ClassificationDecision,
    PageFeatures,
    RowShape,
    classify,
    looks_like_detail_fragment,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Label vocabularies
# -----------------------------------------------------------------------------

AUTHOR_LABELS = ("作者",)
LIST_CATEGORY_LABELS = ("类别", "分类", "类型", "题材")
LIST_PLATFORM_LABELS = ("来源", "平台")
LIST_WORD_COUNT_LABELS = ("字数",)

DETAIL_CATEGORY_LABELS = (
    "作品分类",
    "作品类别",
    "小说分类",
    "小说类别",
    "作品类型",
    "小说类型",
)
DETAIL_PLATFORM_LABELS = ("首发网站", "首发站点", "首发平台")
DETAIL_WORD_COUNT_LABELS = ("作品字数", "总字数", "字数")
DETAIL_STATUS_LABELS = ("写作进度", "作品状态", "连载状态")

CATEGORY_LABELS = LIST_CATEGORY_LABELS + DETAIL_CATEGORY_LABELS
PLATFORM_LABELS = LIST_PLATFORM_LABELS + DETAIL_PLATFORM_LABELS

# a tab-panel block containing any of these is the info table, not a synopsis
TABLE_KEYWORDS = (
    DETAIL_CATEGORY_LABELS
    + DETAIL_PLATFORM_LABELS
    + DETAIL_WORD_COUNT_LABELS
    + DETAIL_STATUS_LABELS
)
STATUS_WORDS = ("连载", "完结", "完本", "暂停", "断更", "太监")

WORD_COUNT_VALUE_PATTERN = r"\d[\d,.]*\s*万?"

_FONT_SIZE_RE = re.compile(r"font-size\s*:\s*(\d+(?:\.\d+)?)px", re.IGNORECASE)
_TITLE_SPLIT_RE = re.compile(r"\s*[_|｜\-–—]\s*")
_COMPACT_SPLIT_RE = re.compile(r"[|｜·/]")
_COMPACT_WORD_COUNT_RE = re.compile(r"\d[\d,.]*\s*万?\s*字")

LARGE_FONT_PX = 18.0


@dataclass(slots=True)
class _DetailFields:
    title: str = ""
    author: str = ""
    cover: str = ""
    category: str = ""
    platform: str = ""
    word_count: int = 0
    description: str = ""

    @property
    def has_table_fields(self) -> bool:
        return bool(self.category or self.platform or self.word_count)


@hub.register_parser()
class YoushuParser(BaseParser):
    site_key = "youshu"
    site_name = "优书网"
    BASE_URL = "https://youshu.me"

    # -------------------------------
    # Listing markup
    # -------------------------------
    ROW_QUERY = f"//*{xclass('c_row')}"
    ROW_TITLE_QUERY = f".//*{xclass('c_subject')}//a"
    ROW_COVER_QUERIES = (f".//*{xclass('fl')}//img", ".//img")
    ROW_DESCRIPTION_QUERY = f".//*{xclass('c_description')}"

    # -------------------------------
    # Detail markup
    # -------------------------------
    TAB_PANEL_QUERY = f"//*{xclass('tabvalue')}"
    DETAIL_COVER_QUERY = f"//*{xclass('book-detail-img')}//img"
    TITLE_QUERIES = (
        f"//*{xclass('booktitle')}",
        f"//*{xclass('book-title')}",
        f"//*{xclass('bookname')}//h1",
        f"//*{xclass('c_subject')}//a",
        "//h1",
    )
    COVER_QUERIES = (
        f"//*{xclass('bookcover')}//img",
        f"//*{xclass('book-cover')}//img",
        f"//*{xclass('book-img')}//img",
        f"//*{xclass('cover')}//img",
        f"//*{xclass('fl')}//img",
        "//img[contains(@src, 'cover')]",
    )
    AUTHOR_LINK_QUERIES = (
        "//text()[contains(., '作者') and "
        "normalize-space(translate(., '作者：:', ''))='']"
        "/following-sibling::*[1][self::a]",
        "//*[contains(text(), '作者') and "
        "normalize-space(translate(string(.), '作者：:', ''))='']"
        "/following-sibling::*[1][self::a]",
    )
    SYNOPSIS_QUERIES = (
        f"//*{xclass('c_description')}",
        f"//*{xclass('book-intro')}",
        f"//*{xclass('bookintro')}",
        "//*[@id='bookintro']",
        f"//*{xclass('intro')}",
    )
    INFO_LIST_QUERIES = (
        f"//*{xclass('bookinfo')}//li",
        f"//*{xclass('workinfo')}//li",
        f"//*{xclass('book-information')}//li",
        f"//*{xclass('book-info')}//li",
        f"//*{xclass('bookinfo')}//p",
        f"//*{xclass('workinfo')}//p",
    )
    COMPACT_LINE_QUERIES = (
        f"//*{xclass('booktag')}",
        f"//*{xclass('book-tag')}",
        f"//*{xclass('info-line')}",
    )

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def classify(self, page: RawPage) -> ClassificationDecision:
        doc = Node.parse(page.html)
        features = PageFeatures(
            url=page.url,
            rows=tuple(self._row_shape(row) for row in doc.select_all(self.ROW_QUERY)),
            has_detail_markers=self._has_detail_markers(doc),
        )
        return classify(features)

    def is_detail_page(self, page: RawPage) -> bool:
        decision = self.classify(page)
        logger.debug(
            "Classified %s as %s (rule=%s: %s)",
            page.url,
            "detail" if decision.is_detail_page else "listing",
            decision.rule,
            decision.reason,
        )
        return decision.is_detail_page

    # -------------------------------------------------------------------------
    # Listing pages
    # -------------------------------------------------------------------------

    def parse_search_result(
        self,
        page: RawPage,
        limit: int | None = None,
    ) -> list[SearchRecord]:
        doc = Node.parse(page.html)
        cap = self._max_results
        if limit is not None:
            cap = max(0, min(limit, cap))

        records = [
            record
            for row in doc.select_all(self.ROW_QUERY)
            if (record := self._parse_row(row)) is not None
        ][:cap]

        if records and all(self._is_blank(r) for r in records):
            logger.debug(
                "All %d rows on %s are blank; no results", len(records), page.url
            )
            return []

        for record in records:
            if looks_like_detail_fragment(
                record.author, record.word_count, record.description
            ):
                raise ExtractionAmbiguity(
                    f"row {record.title!r} looks like a detail fragment",
                    records=records,
                )
        return records

    def _parse_row(self, row: Node) -> SearchRecord | None:
        link = row.select_first(self.ROW_TITLE_QUERY)
        title = self._clean_title(link.text()) if link else ""
        if not link or not title:
            return None

        table = scan_label_value_fields(row)
        author = pick_field(table, AUTHOR_LABELS)
        description = self._row_description(row)

        return SearchRecord(
            title=title,
            author=author or DEFAULT_AUTHOR,
            cover=self._cover_url(self._row_cover(row)),
            platform=pick_field(table, LIST_PLATFORM_LABELS) or None,
            category=pick_field(table, LIST_CATEGORY_LABELS),
            word_count=parse_word_count(pick_field(table, LIST_WORD_COUNT_LABELS)),
            description=description or DEFAULT_DESCRIPTION,
            source_url=self._abs_url(link.attr("href")),
        )

    def _row_shape(self, row: Node) -> RowShape:
        table = scan_label_value_fields(row)
        return RowShape(
            author=pick_field(table, AUTHOR_LABELS),
            word_count=parse_word_count(pick_field(table, LIST_WORD_COUNT_LABELS)),
            description=self._row_description(row),
        )

    def _row_description(self, row: Node) -> str:
        node = row.select_first(self.ROW_DESCRIPTION_QUERY)
        return self._norm_space(node.text()) if node else ""

    def _row_cover(self, row: Node) -> str:
        for query in self.ROW_COVER_QUERIES:
            if (img := row.select_first(query)) and (src := self._img_src(img)):
                return src
        return ""

    @staticmethod
    def _is_blank(record: SearchRecord) -> bool:
        return (
            not record.has_author
            and record.word_count == 0
            and not record.has_description
        )

    # -------------------------------------------------------------------------
    # Detail pages
    # -------------------------------------------------------------------------

    def parse_book_detail(self, page: RawPage) -> SearchRecord | None:
        doc = Node.parse(page.html)
        fields = self._extract_detail(doc)
        if not fields.title:
            logger.debug("No title found on detail page %s", page.url)
            return None

        return SearchRecord(
            title=fields.title,
            author=fields.author or DEFAULT_AUTHOR,
            cover=self._cover_url(fields.cover),
            platform=fields.platform or None,
            category=fields.category,
            word_count=fields.word_count,
            description=fields.description or DEFAULT_DESCRIPTION,
            source_url=self._canonical_url(doc, page.url),
        )

    def parse_detail_meta(self, page: RawPage) -> DetailMeta:
        fields = self._extract_detail(Node.parse(page.html))

        meta: DetailMeta = {}
        if fields.category:
            meta["category"] = fields.category
        if fields.platform:
            meta["platform"] = fields.platform
        if fields.description:
            meta["description"] = fields.description
        return meta

    def _extract_detail(self, doc: Node) -> _DetailFields:
        panels = doc.select_all(self.TAB_PANEL_QUERY)
        fields = _DetailFields(
            title=self._detail_title(doc),
            cover=self._detail_cover(doc),
            author=self._detail_author(doc),
            description=self._detail_synopsis(doc, panels),
        )

        self._fill_from_info_table(fields, doc, panels)
        if not fields.has_table_fields:
            self._fill_from_compact_line(fields, doc)
        if not fields.has_table_fields:
            self._fill_from_table(fields, scan_label_value_fields(doc))

        self._backfill(fields, doc)
        return fields

    def _detail_title(self, doc: Node) -> str:
        for node in doc.select_all("//body//*[contains(@style, 'font-size')]"):
            m = _FONT_SIZE_RE.search(node.attr("style"))
            if m and float(m.group(1)) >= LARGE_FONT_PX:
                if title := self._clean_title(node.text()):
                    return title

        for query in self.TITLE_QUERIES:
            node = doc.select_first(query)
            if node and (title := self._clean_title(node.text())):
                return title

        head = doc.select_first("//title")
        if head:
            for part in _TITLE_SPLIT_RE.split(head.text()):
                if title := self._clean_title(part):
                    return title
        return ""

    def _detail_cover(self, doc: Node) -> str:
        for query in (self.DETAIL_COVER_QUERY, *self.COVER_QUERIES):
            if (img := doc.select_first(query)) and (src := self._img_src(img)):
                return src

        og = doc.select_first("//meta[@property='og:image']")
        return og.attr("content") if og else ""

    def _detail_author(self, doc: Node) -> str:
        for query in self.AUTHOR_LINK_QUERIES:
            link = doc.select_first(query)
            if link and (author := link.text()):
                return author
        return pick_field(scan_label_value_fields(doc), AUTHOR_LABELS)

    def _detail_synopsis(self, doc: Node, panels: list[Node]) -> str:
        if panels:
            for block in panels[0].select_all(".//div"):
                text = self._norm_space(block.text())
                if len(text) > self._min_synopsis_length and not any(
                    kw in text for kw in TABLE_KEYWORDS
                ):
                    return text

        for query in self.SYNOPSIS_QUERIES:
            node = doc.select_first(query)
            if node and (text := self._norm_space(node.text())):
                return text

        meta = doc.select_first("//meta[@name='description']")
        return self._norm_space(meta.attr("content")) if meta else ""

    def _fill_from_info_table(
        self,
        fields: _DetailFields,
        doc: Node,
        panels: list[Node],
    ) -> None:
        cells = panels[1].select_all(".//td") if len(panels) > 1 else []
        for query in self.INFO_LIST_QUERIES:
            cells.extend(doc.select_all(query))

        for cell in cells:
            self._fill_from_text(fields, cell.text())
            if fields.category and fields.platform and fields.word_count:
                break

    def _fill_from_compact_line(self, fields: _DetailFields, doc: Node) -> None:
        line = next(
            (n for q in self.COMPACT_LINE_QUERIES if (n := doc.select_first(q))),
            None,
        )
        if line is None:
            return

        positional: list[str] = []
        for text in line.texts():
            for part in _COMPACT_SPLIT_RE.split(text):
                fragment = part.strip()
                if not fragment:
                    continue
                if _COMPACT_WORD_COUNT_RE.search(fragment):
                    fields.word_count = fields.word_count or parse_word_count(fragment)
                elif not any(word in fragment for word in STATUS_WORDS):
                    positional.append(fragment)

        # platform | category | status | word count
        if positional:
            fields.platform = fields.platform or positional[0]
        if len(positional) > 1:
            fields.category = fields.category or positional[1]

    @staticmethod
    def _fill_from_table(fields: _DetailFields, table: RawFieldTable) -> None:
        fields.author = fields.author or pick_field(table, AUTHOR_LABELS)
        fields.category = fields.category or pick_field(table, CATEGORY_LABELS)
        fields.platform = fields.platform or pick_field(table, PLATFORM_LABELS)
        fields.word_count = fields.word_count or parse_word_count(
            pick_field(table, LIST_WORD_COUNT_LABELS + DETAIL_WORD_COUNT_LABELS)
        )

    @staticmethod
    def _fill_from_text(fields: _DetailFields, text: str) -> None:
        fields.category = fields.category or extract_labeled_value(
            text, DETAIL_CATEGORY_LABELS
        )
        fields.platform = fields.platform or extract_labeled_value(
            text, DETAIL_PLATFORM_LABELS
        )
        fields.word_count = fields.word_count or parse_word_count(
            extract_labeled_value(
                text, DETAIL_WORD_COUNT_LABELS, WORD_COUNT_VALUE_PATTERN
            )
        )

    def _backfill(self, fields: _DetailFields, doc: Node) -> None:
        self._fill_from_table(fields, scan_label_value_fields(doc))
        if fields.author and fields.category and fields.platform and fields.word_count:
            return

        body = doc.select_first("//body")
        text = body.text() if body else ""
        self._fill_from_text(fields, text)
        fields.author = fields.author or extract_labeled_value(text, AUTHOR_LABELS)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _has_detail_markers(self, doc: Node) -> bool:
        return bool(
            doc.select_first(self.TAB_PANEL_QUERY)
            or doc.select_first(self.DETAIL_COVER_QUERY)
        )

    def _canonical_url(self, doc: Node, fallback: str) -> str:
        link = doc.select_first("//link[@rel='canonical']")
        href = link.attr("href") if link else ""
        return self._abs_url(href or fallback)

    @staticmethod
    def _img_src(img: Node) -> str:
        return img.attr("src") or img.attr("data-original") or img.attr("data-src")

    @classmethod
    def _clean_title(cls, text: str) -> str:
        return cls._norm_space(text).strip("《》").strip()
