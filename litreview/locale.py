"""Localized strings for table headers, default fields and CLI messages."""
from typing import Any, Dict

DEFAULT_LOCALE = "zh"

STRINGS: Dict[str, Dict[str, str]] = {
    "zh": {
        "column-item-id": "Item ID",
        "column-id": "ID",
        "column-title": "标题",
        "column-authors": "作者",
        "column-year": "年份",
        "column-journal": "期刊",
        "column-doi": "DOI",
        "field-relevance": "相关性",
        "field-quality": "质量评分",
        "field-included": "是否纳入",
        "field-notes": "评审备注",
        "relevance-high": "高",
        "relevance-medium": "中",
        "relevance-low": "低",
        "relevance-none": "不相关",
        "new-field": "新字段",
        "type-text": "文本",
        "type-select": "下拉选项",
        "type-number": "数字",
        "type-date": "日期",
        "type-boolean": "是/否",
        "review-stats": "共 {total} 条评审记录，已纳入 {included} 条",
        "fields-saved": "字段配置已保存",
        "review-refreshed": "评审表格已刷新",
        "review-export-success": "导出成功: {path}",
        "review-export-failed": "导出失败: {error}",
        "review-cleared": "所有评审数据已清空",
        "value-saved": "已保存",
    },
    "en": {
        "column-item-id": "Item ID",
        "column-id": "ID",
        "column-title": "Title",
        "column-authors": "Authors",
        "column-year": "Year",
        "column-journal": "Journal",
        "column-doi": "DOI",
        "field-relevance": "Relevance",
        "field-quality": "Quality",
        "field-included": "Included",
        "field-notes": "Review notes",
        "relevance-high": "High",
        "relevance-medium": "Medium",
        "relevance-low": "Low",
        "relevance-none": "Not relevant",
        "new-field": "New field",
        "type-text": "Text",
        "type-select": "Dropdown",
        "type-number": "Number",
        "type-date": "Date",
        "type-boolean": "Yes/No",
        "review-stats": "{total} review records, {included} included",
        "fields-saved": "Field configuration saved",
        "review-refreshed": "Review table refreshed",
        "review-export-success": "Exported to {path}",
        "review-export-failed": "Export failed: {error}",
        "review-cleared": "All review data cleared",
        "value-saved": "Saved",
    },
}


def get_string(key: str, locale: str = DEFAULT_LOCALE, **args: Any) -> str:
    """Look up a localized string, falling back to the default locale, then the key."""
    table = STRINGS.get(locale, STRINGS[DEFAULT_LOCALE])
    template = table.get(key) or STRINGS[DEFAULT_LOCALE].get(key) or key
    if args:
        return template.format(**args)
    return template
