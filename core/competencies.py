"""Reference tables for core competencies and duty-free store categories.

Both tables are process-wide constants keyed by the codes stored on every
report.  The codes form closed sets: ``COMPETENCY_CODES`` and
``STORE_CATEGORY_CODES`` are the only values the report store accepts.
Labels are Traditional Chinese, the language the reports are written in.
"""
from types import MappingProxyType

# code -> {name, definition, key_behaviors}
CORE_COMPETENCIES = MappingProxyType({
    "integrity": {
        "name": "誠信積極",
        "definition": (
            "展現真誠，言行一致，遵循道德倫理、專業標準與組織規範；清楚自身優劣勢，"
            "覺察自身行為對他人的影響，努力贏得他人對個人與組織的信任。"
            "主動採取行動以達成甚至超越要求，展現積極熱忱的態度。"
        ),
        "key_behaviors": (
            "遵守道德倫理、專業標準與組織政策，以行動兌現承諾，在不同情境下保持言行一致",
            "願意表達個人想法與立場，尊重並平等對待他人，面對不同意見時仍能支持好的想法",
            "發生錯誤時勇於承擔並承認，採取適當的補救措施",
            "了解自身發展目標與現況，主動尋求回饋並據以調整行為",
            "遇到問題時立即採取行動，願意超越職責範圍以更好地達成目標",
        ),
    },
    "excellence": {
        "name": "追求卓越",
        "definition": (
            "為自己與他人設定高標準的績效要求，對完成任務抱持強烈使命感；"
            "面對困難、挑戰或挫折時能妥善應對並維持工作效率。"
        ),
        "key_behaviors": (
            "建立卓越的工作模式或流程，以達到高品質的產出與服務",
            "投入必要的時間與心力確保品質，顧及細節不遺漏，努力克服任務中的障礙",
            "在進度壓力與多重要求下仍聚焦重要任務，有效管理相互衝突的需求",
            "遭遇挫折後仍維持工作效率，將挫折視為挑戰並持續全力以赴",
        ),
    },
    "innovation": {
        "name": "引發創新",
        "definition": (
            "以不同或嶄新的觀點與方式處理問題或機會，持續發展創新且可行的解決方案；"
            "面對挑戰時保持正面思考，協助他人看見機會，主動學習並將所學落實於工作。"
        ),
        "key_behaviors": (
            "思考問題背後的假設，從不同角度看待問題，不受既有想法或做法限制",
            "在變動或困難中看見正面意義，鼓勵他人以正向態度面對變化",
            "向不同的人或來源尋求創意，連結看似無關的想法，與他人腦力激盪找出新解法",
            "積極將新知識或技巧應用於工作，願意承擔學習風險並接受陌生或具挑戰性的任務",
        ),
    },
    "service": {
        "name": "服務導向",
        "definition": (
            "致力了解內外部客戶，將滿足客戶需求視為優先要務，"
            "並與內外部客戶建立及維持良好的合作關係。"
        ),
        "key_behaviors": (
            "主動透過多元管道了解內外部客戶的情境、問題、期望與需求",
            "與客戶分享資訊，協助客戶了解現況與可提供的服務，適時給予說明與教育",
            "運用適當的人際技巧邀請客戶表達意見，建立並維持良好的合作關係",
            "考量行動對客戶的影響，迅速回應客戶需求或問題，並避免過度承諾",
            "以有效方法了解並評估客戶的考量與滿意度，預先掌握潛在需求",
        ),
    },
    "teamwork": {
        "name": "團隊共贏",
        "definition": (
            "善盡個人在團隊中的職責，投入並支持團隊，積極參與團隊任務，"
            "以促進團隊達成共同目標。"
        ),
        "key_behaviors": (
            "了解自身在團隊中的角色與職責，以完成團隊目標為己任",
            "以身作則遵守團隊規範，履行對團隊的承諾與責任",
            "在團隊討論中傾聽他人意見，邀請成員參與決策，分享重要的工作資訊",
            "全力投入並提供必要資源或協助排除障礙，與成員合作追求共贏",
            "重視並善用成員不同的才能與專長，發揮團隊合作的最大綜效",
        ),
    },
})

STORE_CATEGORIES = MappingProxyType({
    "skincare": "保養",
    "makeup": "彩妝",
    "fragrance": "香水香氛",
    "women_luxury": "女仕精品",
    "men_luxury": "男仕精品",
    "digital": "數位家電",
    "toys": "玩具",
    "home": "居家生活",
    "souvenir": "伴手禮",
    "tobacco_alcohol": "菸酒",
})

COMPETENCY_CODES = tuple(CORE_COMPETENCIES)
STORE_CATEGORY_CODES = tuple(STORE_CATEGORIES)


def competency_label(code):
    """Display name for a competency code; unknown codes are returned as-is."""
    info = CORE_COMPETENCIES.get(code)
    return info["name"] if info else code


def store_category_label(code):
    """Display name for a store category code; unknown codes are returned as-is."""
    return STORE_CATEGORIES.get(code, code)


def option_list():
    """Return both code sets with labels, in display order."""
    return {
        "competencies": [
            {"value": code, "label": info["name"]}
            for code, info in CORE_COMPETENCIES.items()
        ],
        "storeCategories": [
            {"value": code, "label": label}
            for code, label in STORE_CATEGORIES.items()
        ],
    }
