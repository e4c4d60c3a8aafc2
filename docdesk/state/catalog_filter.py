"""
目录筛选

纯函数：对静态目录按分类与关键字筛选，得到可见集合。
没有副作用和I/O，可以在每次按键时调用。
"""

from typing import List, Sequence, Union

from docdesk.models.catalog import CATEGORY_ALL, Category, DocEntry, Language, coerce_category


def search_text(doc: DocEntry, language: Language) -> str:
    """拼接参与匹配的字段并转小写

    字段：当前语言标题、所有语言标题、当前语言摘要、默认路径、关键字。
    """
    bag = [doc.title.get(language), *doc.title.values(), doc.summary.get(language), doc.path]
    bag.extend(doc.keywords)
    return " ".join(bag).lower()


def filter_documents(
    catalog: Sequence[DocEntry],
    category: Union[Category, str],
    query: str,
    language: Language,
) -> List[DocEntry]:
    """
    计算可见集合

    结果保持目录声明顺序，不按相关度重排。关键字为子串包含匹配
    （不分词、不模糊、不排序）；去掉首尾空白后为空则匹配全部。

    Args:
        catalog: 文档目录
        category: 分类或其字符串值，CATEGORY_ALL 表示不过滤分类
        query: 自由文本关键字
        language: 当前界面语言

    Returns:
        目录的有序子序列

    Raises:
        ValueError: 未知分类
    """
    category = coerce_category(category)
    normalized = (query or "").strip().lower()
    match_all_categories = category == CATEGORY_ALL

    visible = []
    for doc in catalog:
        if not match_all_categories and doc.category != category:
            continue
        if normalized and normalized not in search_text(doc, language):
            continue
        visible.append(doc)
    return visible
