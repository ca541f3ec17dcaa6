"""Static reference tables.

Content only: lookup logic lives in reference.py. Every table is read-only
after import. Ordered ``(pattern, key)`` tuples encode match precedence, so
more specific patterns come first.

Sources: 소상공인시장진흥공단, 창업진흥원, 통계청 전국사업체조사,
서울열린데이터광장 (hand-tuned estimates, 2024 Q4).
"""

from __future__ import annotations

from types import MappingProxyType

from .models import (
    AgeDistribution,
    AreaProfile,
    AreaType,
    BusinessFit,
    Coordinates,
    GenderPreference,
    GenderRatio,
    PopulationCounts,
    TimeDistribution,
    ValueRange,
)

DATA_VERSION = "2024.4"

UNKNOWN_BUSINESS = "unknown"
DEFAULT_REGION = "지방"

BUSINESS_TYPES = (
    "카페", "음식점", "편의점", "미용실", "치킨", "호프",
    "분식", "베이커리", "무인매장", "스터디카페", "네일샵", "반려동물",
)

# ─── Normalization patterns ──────────────────────────────────────────────────

BUSINESS_TYPE_PATTERNS: tuple[tuple[str, str], ...] = (
    ("스터디카페", "스터디카페"),
    ("독서실", "스터디카페"),
    ("스터디", "스터디카페"),
    ("무인", "무인매장"),
    ("셀프", "무인매장"),
    ("코인", "무인매장"),
    ("네일", "네일샵"),
    ("반려", "반려동물"),
    ("애견", "반려동물"),
    ("펫", "반려동물"),
    ("베이커리", "베이커리"),
    ("제과", "베이커리"),
    ("빵", "베이커리"),
    ("카페", "카페"),
    ("커피", "카페"),
    ("coffee", "카페"),
    ("cafe", "카페"),
    ("치킨", "치킨"),
    ("닭", "치킨"),
    ("호프", "호프"),
    ("맥주", "호프"),
    ("주점", "호프"),
    ("술집", "호프"),
    ("분식", "분식"),
    ("떡볶이", "분식"),
    ("김밥", "분식"),
    ("편의점", "편의점"),
    ("마트", "편의점"),
    ("슈퍼", "편의점"),
    ("미용", "미용실"),
    ("헤어", "미용실"),
    ("음식", "음식점"),
    ("식당", "음식점"),
    ("레스토랑", "음식점"),
    ("한식", "음식점"),
    ("중식", "음식점"),
    ("일식", "음식점"),
    ("양식", "음식점"),
)

REGION_PATTERNS: tuple[tuple[str, str], ...] = (
    ("강남", "서울 강남"),
    ("역삼", "서울 강남"),
    ("서초", "서울 강남"),
    ("홍대", "서울 홍대"),
    ("합정", "서울 홍대"),
    ("상수", "서울 홍대"),
    ("연남", "서울 홍대"),
    ("마포", "서울 홍대"),
    ("명동", "서울 명동"),
    ("을지로", "서울 명동"),
    ("충무로", "서울 명동"),
    ("서울", "서울"),
    ("경기", "경기"),
    ("판교", "경기"),
    ("분당", "경기"),
    ("성남", "경기"),
    ("수원", "경기"),
    ("용인", "경기"),
    ("고양", "경기"),
    ("일산", "경기"),
    ("인천", "인천"),
    ("송도", "인천"),
    ("부평", "인천"),
    ("부산", "부산"),
    ("해운대", "부산"),
    ("서면", "부산"),
    ("대구", "대구"),
    ("대전", "대전"),
    ("유성", "대전"),
    ("광주", "광주"),
    ("울산", "울산"),
    ("세종", "세종"),
    ("제주", "제주"),
)

LOCATION_ALIASES: tuple[tuple[str, str], ...] = (
    ("홍대", "홍대입구"),
    ("홍대역", "홍대입구"),
    ("홍익대", "홍대입구"),
    ("홍익대학교", "홍대입구"),
    ("상수", "홍대입구"),
    ("상수역", "홍대입구"),
    ("합정", "홍대입구"),
    ("강남구 역삼동", "강남역"),
    ("강남", "강남역"),
    ("역삼", "강남역"),
    ("역삼역", "강남역"),
    ("건대", "건대입구"),
    ("건대역", "건대입구"),
    ("건국대", "건대입구"),
    ("건국대학교", "건대입구"),
    ("신촌역", "신촌"),
    ("연세대", "신촌"),
    ("연세대학교", "신촌"),
    ("이대", "신촌"),
    ("이화여대", "신촌"),
    ("잠실역", "잠실"),
    ("잠실새내", "잠실"),
    ("송파", "잠실"),
    ("롯데월드", "잠실"),
    ("명동역", "명동"),
    ("을지로", "명동"),
    ("충무로", "명동"),
    ("이태원역", "이태원"),
    ("경리단길", "이태원"),
    ("해방촌", "이태원"),
    ("여의도역", "여의도"),
    ("여의나루", "여의도"),
    ("국회의사당", "여의도"),
    ("서울역광장", "서울역"),
    ("남대문", "서울역"),
    ("남대문시장", "서울역"),
    ("판교역", "판교"),
    ("판교테크노밸리", "판교"),
    ("해운대역", "해운대"),
    ("해운대해수욕장", "해운대"),
    ("마린시티", "해운대"),
    ("서면역", "서면"),
    ("부산서면", "서면"),
)

AREA_TYPE_KEYWORDS: tuple[tuple[str, AreaType], ...] = (
    ("역", AreaType.STATION),
    ("station", AreaType.STATION),
    ("대학", AreaType.UNIVERSITY),
    ("학교", AreaType.UNIVERSITY),
    ("캠퍼스", AreaType.UNIVERSITY),
    ("오피스", AreaType.OFFICE),
    ("빌딩", AreaType.OFFICE),
    ("센터", AreaType.OFFICE),
    ("테크노", AreaType.OFFICE),
    ("아파트", AreaType.RESIDENTIAL),
    ("주공", AreaType.RESIDENTIAL),
    ("동", AreaType.RESIDENTIAL),
    ("마을", AreaType.RESIDENTIAL),
    ("해변", AreaType.TOURIST),
    ("관광", AreaType.TOURIST),
    ("공원", AreaType.TOURIST),
    ("명소", AreaType.TOURIST),
    ("유흥", AreaType.NIGHTLIFE),
    ("클럽", AreaType.NIGHTLIFE),
    ("바", AreaType.NIGHTLIFE),
)

# ─── Competitor search ───────────────────────────────────────────────────────

BUSINESS_SEARCH_KEYWORDS = MappingProxyType({
    "카페": ("커피", "카페", "음료", "디저트"),
    "음식점": ("음식", "식당", "레스토랑", "한식", "중식", "일식", "양식"),
    "편의점": ("편의점", "마트", "슈퍼"),
    "미용실": ("미용", "헤어", "살롱", "뷰티"),
    "치킨": ("치킨", "닭", "후라이드"),
    "호프": ("호프", "맥주", "주점", "술집"),
    "분식": ("분식", "떡볶이", "라면", "김밥"),
    "베이커리": ("빵", "베이커리", "제과", "케이크"),
    "무인매장": ("무인", "셀프", "코인"),
    "스터디카페": ("스터디", "독서실", "공부"),
    "네일샵": ("네일", "손톱", "매니큐어"),
    "반려동물": ("반려", "펫", "애견", "동물"),
})

# Exact user terms rewritten to what place keyword search answers best
PLACE_SEARCH_TERMS = MappingProxyType({
    "치킨": "치킨집",
    "커피": "카페",
    "음식점": "맛집",
    "식당": "맛집",
    "헤어샵": "미용실",
    "햄버거": "버거",
    "중식": "중국집",
    "일식": "일식당",
    "분식": "분식집",
    "빵": "빵집",
    "닭": "치킨집",
    "펫": "펫샵",
})

# Place keyword search rejects shorter queries
MIN_SEARCH_TERM_LENGTH = 2

# Place-search category group codes per business, where one exists
PLACE_CATEGORY_CODES = MappingProxyType({
    "음식점": "FD6",
    "카페": "CE7",
    "편의점": "CS2",
})

# Categories counted to size a commercial district
DISTRICT_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("음식점", "FD6"),
    ("카페", "CE7"),
    ("편의점", "CS2"),
    ("대형마트", "MT1"),
)

FRANCHISE_KEYWORDS = (
    "스타벅스", "투썸", "이디야", "메가커피", "빽다방", "컴포즈",
    "맥도날드", "버거킹", "롯데리아", "KFC", "맘스터치",
    "BBQ", "BHC", "교촌", "네네", "굽네",
    "CU", "GS25", "세븐일레븐", "이마트24", "미니스톱",
    "올리브영", "다이소", "아트박스",
    "파리바게뜨", "뚜레쥬르", "성심당",
)

# Same-category stores within 500m that a district supports comfortably
OPTIMAL_STORE_COUNTS = MappingProxyType({
    "카페": 10,
    "음식점": 20,
    "편의점": 5,
    "미용실": 8,
})
DEFAULT_OPTIMAL_STORE_COUNT = 10

# ─── Regional cost multipliers ───────────────────────────────────────────────

REGIONAL_MULTIPLIERS = MappingProxyType({
    "서울 강남": {"multiplier": 1.5, "note": "전국 최고 수준의 임대료와 권리금"},
    "서울 홍대": {"multiplier": 1.3, "note": "젊은층 유동인구가 많아 임대료 높음"},
    "서울 명동": {"multiplier": 1.4, "note": "관광특구, 외국인 수요로 임대료 높음"},
    "서울": {"multiplier": 1.2, "note": "수도권 평균 대비 높은 임대료"},
    "경기": {"multiplier": 1.0, "note": "전국 평균 수준"},
    "인천": {"multiplier": 0.95, "note": "신도시 지역은 서울 수준"},
    "부산": {"multiplier": 0.95, "note": "해운대·서면 등 핵심 상권은 높음"},
    "대구": {"multiplier": 0.85, "note": "지방 광역시 평균"},
    "대전": {"multiplier": 0.85, "note": "지방 광역시 평균"},
    "광주": {"multiplier": 0.8, "note": "지방 광역시 중 낮은 편"},
    "울산": {"multiplier": 0.85, "note": "산업단지 인근 수요 안정적"},
    "세종": {"multiplier": 0.9, "note": "공공기관 중심 상권"},
    "제주": {"multiplier": 0.9, "note": "관광지 상권은 계절 편차 큼"},
    "지방": {"multiplier": 0.75, "note": "중소도시 평균"},
})

RENT_MULTIPLIERS = MappingProxyType({
    "서울 강남": 1.5,
    "서울 홍대": 1.2,
    "서울 명동": 1.4,
    "서울": 1.0,
    "경기": 0.7,
    "인천": 0.6,
    "부산": 0.65,
    "대구": 0.55,
    "대전": 0.5,
    "광주": 0.5,
    "울산": 0.55,
    "세종": 0.6,
    "제주": 0.7,
    "지방": 0.4,
})
DEFAULT_RENT_MULTIPLIER = 0.5

# 평당 만원, 1층 상가 기준
BASE_RENT_PER_PYEONG = MappingProxyType({
    "서울 강남": {"deposit": 500, "monthly": 35},
    "서울 홍대": {"deposit": 400, "monthly": 30},
    "서울 명동": {"deposit": 450, "monthly": 32},
    "서울": {"deposit": 300, "monthly": 22},
    "경기": {"deposit": 200, "monthly": 15},
    "인천": {"deposit": 180, "monthly": 13},
    "부산": {"deposit": 200, "monthly": 14},
    "대구": {"deposit": 170, "monthly": 12},
    "대전": {"deposit": 160, "monthly": 11},
    "광주": {"deposit": 160, "monthly": 11},
    "울산": {"deposit": 180, "monthly": 12},
    "세종": {"deposit": 180, "monthly": 13},
    "제주": {"deposit": 220, "monthly": 16},
    "지방": {"deposit": 120, "monthly": 8},
})

FLOOR_MULTIPLIERS = MappingProxyType({
    "1층": 1.0,
    "2층": 0.7,
    "지하1층": 0.5,
    "3층이상": 0.6,
})

BUILDING_TYPE_MULTIPLIERS = MappingProxyType({
    "상가": 1.0,
    "오피스텔": 0.85,
    "주상복합": 1.1,
    "단독건물": 0.9,
})

MANAGEMENT_FEE_PER_PYEONG = 3

# ─── Startup cost profiles (만원) ─────────────────────────────────────────────

BUSINESS_COST_PROFILES = MappingProxyType({
    "카페": {
        "deposit": ValueRange(min=2000, max=5000),
        "interior": {"basic": 150, "standard": 200, "premium": 300},
        "equipment": ValueRange(min=1500, max=3000),
        "inventory": ValueRange(min=200, max=400),
        "monthly_operating": 400,
    },
    "음식점": {
        "deposit": ValueRange(min=2000, max=6000),
        "interior": {"basic": 180, "standard": 250, "premium": 350},
        "equipment": ValueRange(min=2000, max=4000),
        "inventory": ValueRange(min=300, max=600),
        "monthly_operating": 600,
    },
    "편의점": {
        "deposit": ValueRange(min=1500, max=4000),
        "interior": {"basic": 100, "standard": 150, "premium": 200},
        "equipment": ValueRange(min=1000, max=2000),
        "inventory": ValueRange(min=2000, max=3000),
        "monthly_operating": 500,
    },
    "미용실": {
        "deposit": ValueRange(min=1500, max=4000),
        "interior": {"basic": 150, "standard": 220, "premium": 320},
        "equipment": ValueRange(min=1000, max=2500),
        "inventory": ValueRange(min=200, max=400),
        "monthly_operating": 400,
    },
    "치킨": {
        "deposit": ValueRange(min=1000, max=3000),
        "interior": {"basic": 120, "standard": 180, "premium": 250},
        "equipment": ValueRange(min=1500, max=2500),
        "inventory": ValueRange(min=200, max=300),
        "monthly_operating": 450,
    },
    "호프": {
        "deposit": ValueRange(min=2000, max=5000),
        "interior": {"basic": 150, "standard": 220, "premium": 300},
        "equipment": ValueRange(min=1500, max=3000),
        "inventory": ValueRange(min=300, max=500),
        "monthly_operating": 550,
    },
    "분식": {
        "deposit": ValueRange(min=1000, max=3000),
        "interior": {"basic": 100, "standard": 150, "premium": 220},
        "equipment": ValueRange(min=800, max=1500),
        "inventory": ValueRange(min=100, max=200),
        "monthly_operating": 350,
    },
    "베이커리": {
        "deposit": ValueRange(min=2000, max=5000),
        "interior": {"basic": 180, "standard": 250, "premium": 350},
        "equipment": ValueRange(min=2500, max=5000),
        "inventory": ValueRange(min=200, max=400),
        "monthly_operating": 500,
    },
    "무인매장": {
        "deposit": ValueRange(min=1000, max=2500),
        "interior": {"basic": 80, "standard": 120, "premium": 180},
        "equipment": ValueRange(min=1500, max=3000),
        "inventory": ValueRange(min=500, max=1000),
        "monthly_operating": 150,
    },
    "스터디카페": {
        "deposit": ValueRange(min=3000, max=6000),
        "interior": {"basic": 150, "standard": 200, "premium": 280},
        "equipment": ValueRange(min=2000, max=4000),
        "inventory": ValueRange(min=0, max=100),
        "monthly_operating": 500,
    },
    "네일샵": {
        "deposit": ValueRange(min=1000, max=2500),
        "interior": {"basic": 120, "standard": 180, "premium": 250},
        "equipment": ValueRange(min=500, max=1000),
        "inventory": ValueRange(min=100, max=200),
        "monthly_operating": 250,
    },
    "반려동물": {
        "deposit": ValueRange(min=1500, max=4000),
        "interior": {"basic": 130, "standard": 200, "premium": 280},
        "equipment": ValueRange(min=1000, max=2500),
        "inventory": ValueRange(min=500, max=1000),
        "monthly_operating": 400,
    },
})

PREMIUM_LEVELS = ("basic", "standard", "premium")

COST_SAVING_TIPS = MappingProxyType({
    "카페": ("중고 에스프레소 머신 활용 시 장비비 30-40% 절감", "테이크아웃 특화로 면적과 인테리어 비용 축소"),
    "음식점": ("주방 설비 리스로 초기 투자 분산", "배달 비중이 높다면 홀 면적 최소화"),
    "편의점": ("본사 지원 인테리어·집기 조건 비교", "가맹 조건별 초기 재고 부담 확인"),
    "무인매장": ("키오스크·CCTV 렌탈로 초기 비용 분산", "주거지 인접 소형 점포로 임대료 절감"),
    "스터디카페": ("좌석 수 단계적 확대", "중고 가구·조명 활용"),
    "공통": (
        "권리금 없는 신축·공실 상가 우선 검토",
        "소상공인 정책자금으로 초기 자금 일부 조달",
        "인테리어 견적은 최소 3곳 이상 비교",
    ),
})

# ─── Breakeven benchmarks ────────────────────────────────────────────────────
# rent_per_pyeong/labor/utilities/other: 만원 per month; average_price: 원

BREAKEVEN_BENCHMARKS = MappingProxyType({
    "카페": {"rent_per_pyeong": 20, "labor_per_person": 250, "min_staff": 2, "utilities": 60, "other_fixed": 80, "variable_ratio": 0.35, "average_price": 5500},
    "음식점": {"rent_per_pyeong": 20, "labor_per_person": 250, "min_staff": 3, "utilities": 80, "other_fixed": 100, "variable_ratio": 0.40, "average_price": 12000},
    "편의점": {"rent_per_pyeong": 18, "labor_per_person": 220, "min_staff": 2, "utilities": 100, "other_fixed": 60, "variable_ratio": 0.75, "average_price": 6000},
    "미용실": {"rent_per_pyeong": 18, "labor_per_person": 280, "min_staff": 2, "utilities": 50, "other_fixed": 60, "variable_ratio": 0.25, "average_price": 35000},
    "치킨": {"rent_per_pyeong": 15, "labor_per_person": 250, "min_staff": 2, "utilities": 70, "other_fixed": 80, "variable_ratio": 0.45, "average_price": 20000},
    "호프": {"rent_per_pyeong": 18, "labor_per_person": 250, "min_staff": 2, "utilities": 70, "other_fixed": 80, "variable_ratio": 0.38, "average_price": 25000},
    "분식": {"rent_per_pyeong": 15, "labor_per_person": 230, "min_staff": 2, "utilities": 50, "other_fixed": 50, "variable_ratio": 0.40, "average_price": 7000},
    "베이커리": {"rent_per_pyeong": 20, "labor_per_person": 250, "min_staff": 2, "utilities": 90, "other_fixed": 80, "variable_ratio": 0.42, "average_price": 8000},
    "무인매장": {"rent_per_pyeong": 15, "labor_per_person": 0, "min_staff": 0, "utilities": 50, "other_fixed": 40, "variable_ratio": 0.55, "average_price": 4000},
    "스터디카페": {"rent_per_pyeong": 15, "labor_per_person": 200, "min_staff": 1, "utilities": 120, "other_fixed": 60, "variable_ratio": 0.15, "average_price": 8000},
    "네일샵": {"rent_per_pyeong": 18, "labor_per_person": 250, "min_staff": 1, "utilities": 30, "other_fixed": 40, "variable_ratio": 0.20, "average_price": 45000},
    "반려동물": {"rent_per_pyeong": 18, "labor_per_person": 250, "min_staff": 2, "utilities": 60, "other_fixed": 60, "variable_ratio": 0.45, "average_price": 30000},
})

# Daily customers needed to break even
ACHIEVABILITY_THRESHOLDS = MappingProxyType({"easy": 50, "normal": 150})

SCENARIO_MULTIPLIERS = MappingProxyType({
    "pessimistic": 0.8,
    "realistic": 1.2,
    "optimistic": 1.5,
})

PAYBACK_THRESHOLDS = MappingProxyType({"excellent": 12, "good": 24, "average": 36})
UNREACHABLE_PAYBACK_MONTHS = 999

# Same-category stores within 500m
COMPETITION_THRESHOLDS = MappingProxyType({"low": 5, "medium": 15, "high": 30})
COMPETITION_SALES_MULTIPLIERS = MappingProxyType({
    "low": 1.15,
    "medium": 1.0,
    "high": 0.85,
    "saturated": 0.7,
})

# ─── Revenue baselines ───────────────────────────────────────────────────────
# Daily revenue in 만원 for a 15평 single-operator store; avg_price in 원

REVENUE_BASELINES = MappingProxyType({
    "카페": {"min": 30, "avg": 50, "max": 80, "customers": 80, "avg_price": 6000},
    "음식점": {"min": 40, "avg": 70, "max": 120, "customers": 50, "avg_price": 12000},
    "편의점": {"min": 80, "avg": 120, "max": 180, "customers": 200, "avg_price": 6000},
    "미용실": {"min": 20, "avg": 40, "max": 70, "customers": 8, "avg_price": 50000},
    "치킨": {"min": 50, "avg": 80, "max": 130, "customers": 40, "avg_price": 20000},
    "호프": {"min": 40, "avg": 70, "max": 120, "customers": 30, "avg_price": 25000},
    "분식": {"min": 25, "avg": 45, "max": 70, "customers": 60, "avg_price": 7000},
    "베이커리": {"min": 35, "avg": 60, "max": 100, "customers": 70, "avg_price": 8000},
    "무인매장": {"min": 15, "avg": 25, "max": 40, "customers": 50, "avg_price": 5000},
    "스터디카페": {"min": 20, "avg": 35, "max": 55, "customers": 40, "avg_price": 8000},
    "네일샵": {"min": 15, "avg": 30, "max": 50, "customers": 6, "avg_price": 50000},
    "반려동물": {"min": 25, "avg": 45, "max": 75, "customers": 15, "avg_price": 30000},
})

SEASONS = ("봄", "여름", "가을", "겨울")

SEASON_MULTIPLIERS = MappingProxyType({
    "카페": {"봄": 1.0, "여름": 1.2, "가을": 1.0, "겨울": 0.9},
    "음식점": {"봄": 1.0, "여름": 0.9, "가을": 1.1, "겨울": 1.1},
    "편의점": {"봄": 1.0, "여름": 1.1, "가을": 1.0, "겨울": 1.0},
    "치킨": {"봄": 1.0, "여름": 1.2, "가을": 1.0, "겨울": 1.0},
    "호프": {"봄": 1.0, "여름": 1.3, "가을": 1.0, "겨울": 0.9},
})
DEFAULT_SEASON_MULTIPLIERS = MappingProxyType({"봄": 1.0, "여름": 1.0, "가을": 1.0, "겨울": 1.0})

PROFIT_MARGINS = MappingProxyType({
    "카페": 0.35,
    "음식점": 0.25,
    "편의점": 0.20,
    "미용실": 0.45,
    "치킨": 0.25,
    "호프": 0.30,
    "분식": 0.30,
    "베이커리": 0.35,
    "무인매장": 0.40,
    "스터디카페": 0.45,
    "네일샵": 0.50,
    "반려동물": 0.35,
})
DEFAULT_PROFIT_MARGIN = 0.30
DEFAULT_REGION_REVENUE_MULTIPLIER = 0.8
BUSINESS_DAYS_PER_MONTH = 26

PEAK_HOURS = MappingProxyType({
    "카페": "오전 8-10시, 오후 2-4시",
    "음식점": "점심 12-1시, 저녁 6-8시",
    "호프": "저녁 7-11시",
    "편의점": "오전 7-9시, 저녁 6-10시",
})
DEFAULT_PEAK_HOURS = "점심 12-2시, 저녁 6-9시"
WEEKEND_NIGHT_BUSINESSES = ("호프", "치킨")
WEEKEND_NIGHT_PEAK_DAYS = "금요일, 토요일"
DEFAULT_PEAK_DAYS = "토요일, 일요일"

# ─── Area profiles ───────────────────────────────────────────────────────────


def _profile(name, coords, population, time, age, gender, peak_hours, characteristics, area_type):
    return AreaProfile(
        name=name,
        coordinates=Coordinates(lat=coords[0], lng=coords[1]) if coords else None,
        population=PopulationCounts(**dict(zip(("total", "residential", "working", "floating"), population))),
        time_distribution=TimeDistribution(**dict(zip(("morning", "lunch", "afternoon", "evening", "night"), time))),
        age_distribution=AgeDistribution(**dict(zip(("teens", "twenties", "thirties", "forties", "fifty_plus"), age))),
        gender_ratio=GenderRatio(male=gender[0], female=gender[1]),
        peak_hours=tuple(peak_hours),
        characteristics=tuple(characteristics),
        area_type=area_type,
    )


AREA_PROFILES = MappingProxyType({
    "강남역": _profile(
        "강남역", (37.498095, 127.02761),
        (180000, 25000, 95000, 60000), (15, 25, 20, 30, 10), (5, 30, 35, 20, 10), (48, 52),
        ["12-14시", "18-21시"], ["직장인 밀집", "IT/스타트업 중심", "유흥가 인접", "높은 소비력"],
        AreaType.MIXED,
    ),
    "홍대입구": _profile(
        "홍대입구", (37.557527, 126.9244669),
        (150000, 20000, 40000, 90000), (10, 20, 25, 30, 15), (15, 45, 25, 10, 5), (45, 55),
        ["14-18시", "19-23시"], ["대학가", "문화예술 중심", "젊은층 밀집", "야간 상권 활성화"],
        AreaType.UNIVERSITY,
    ),
    "신촌": _profile(
        "신촌", (37.555946, 126.9368),
        (120000, 30000, 25000, 65000), (12, 22, 25, 28, 13), (10, 50, 20, 12, 8), (48, 52),
        ["12-14시", "18-22시"], ["대학가", "저렴한 가격대", "학생 위주", "음식점 밀집"],
        AreaType.UNIVERSITY,
    ),
    "건대입구": _profile(
        "건대입구", (37.540372, 127.069276),
        (130000, 35000, 30000, 65000), (12, 23, 22, 30, 13), (12, 42, 25, 13, 8), (47, 53),
        ["12-14시", "19-22시"], ["대학가", "쇼핑몰 인접", "젊은층 밀집", "맛집 밀집"],
        AreaType.UNIVERSITY,
    ),
    "명동": _profile(
        "명동", (37.560977, 126.986325),
        (200000, 5000, 45000, 150000), (8, 25, 35, 25, 7), (15, 35, 25, 15, 10), (40, 60),
        ["13-17시", "18-20시"], ["관광특구", "외국인 비중 높음", "화장품/패션 중심", "주말 집중"],
        AreaType.TOURIST,
    ),
    "이태원": _profile(
        "이태원", (37.534685, 126.994831),
        (80000, 15000, 20000, 45000), (5, 15, 20, 35, 25), (5, 40, 35, 15, 5), (50, 50),
        ["18-22시", "22-02시"], ["외국인 밀집", "유흥가", "다양한 음식문화", "야간 특화"],
        AreaType.NIGHTLIFE,
    ),
    "여의도": _profile(
        "여의도", (37.521597, 126.924173),
        (140000, 20000, 100000, 20000), (20, 30, 25, 20, 5), (3, 20, 35, 30, 12), (55, 45),
        ["12-13시", "18-19시"], ["금융 중심", "직장인 특화", "주말 한산", "높은 객단가"],
        AreaType.OFFICE,
    ),
    "서울역": _profile(
        "서울역", (37.555946, 126.972317),
        (160000, 10000, 50000, 100000), (25, 20, 20, 25, 10), (8, 25, 30, 22, 15), (52, 48),
        ["08-10시", "17-19시"], ["교통 요충지", "출퇴근 인구 집중", "관광객", "다양한 연령대"],
        AreaType.STATION,
    ),
    "잠실": _profile(
        "잠실", (37.513281, 127.100159),
        (170000, 60000, 50000, 60000), (15, 22, 25, 28, 10), (12, 25, 28, 22, 13), (48, 52),
        ["12-14시", "18-21시"], ["쇼핑몰 밀집", "가족 단위", "주거+상업 복합", "주말 활성화"],
        AreaType.MIXED,
    ),
    "판교": _profile(
        "판교", (37.394761, 127.111172),
        (100000, 40000, 50000, 10000), (18, 30, 22, 25, 5), (5, 20, 45, 25, 5), (58, 42),
        ["12-13시", "18-20시"], ["IT/스타트업 밀집", "젊은 직장인", "높은 소득수준", "주말 한산"],
        AreaType.OFFICE,
    ),
    "해운대": _profile(
        "해운대", (35.158698, 129.16016),
        (130000, 50000, 30000, 50000), (10, 20, 30, 30, 10), (10, 30, 25, 20, 15), (48, 52),
        ["14-18시", "19-22시"], ["관광지", "계절 편차 큼", "해변 상권", "주말/휴가 집중"],
        AreaType.TOURIST,
    ),
    "서면": _profile(
        "서면", (35.157896, 129.059118),
        (140000, 30000, 60000, 50000), (12, 25, 22, 30, 11), (12, 35, 28, 15, 10), (47, 53),
        ["12-14시", "18-22시"], ["부산 최대 상권", "젊은층 밀집", "쇼핑+유흥 복합", "교통 요충지"],
        AreaType.MIXED,
    ),
})

AREA_TYPE_PATTERNS = MappingProxyType({
    AreaType.STATION: _profile(
        AreaType.STATION.value, None,
        (100000, 20000, 40000, 40000), (25, 20, 18, 27, 10), (10, 25, 30, 22, 13), (50, 50),
        ["08-10시", "17-20시"], ["출퇴근 인구 집중", "다양한 연령대", "빠른 회전"],
        AreaType.STATION,
    ),
    AreaType.UNIVERSITY: _profile(
        AreaType.UNIVERSITY.value, None,
        (80000, 25000, 15000, 40000), (10, 25, 25, 28, 12), (15, 50, 20, 10, 5), (48, 52),
        ["12-14시", "18-22시"], ["젊은층 밀집", "저가 선호", "방학 영향"],
        AreaType.UNIVERSITY,
    ),
    AreaType.OFFICE: _profile(
        AreaType.OFFICE.value, None,
        (90000, 10000, 70000, 10000), (20, 35, 20, 20, 5), (3, 22, 38, 28, 9), (55, 45),
        ["12-13시"], ["점심 특화", "주말 한산", "직장인 중심"],
        AreaType.OFFICE,
    ),
    AreaType.RESIDENTIAL: _profile(
        AreaType.RESIDENTIAL.value, None,
        (50000, 40000, 5000, 5000), (15, 15, 20, 35, 15), (15, 15, 25, 25, 20), (48, 52),
        ["18-21시"], ["저녁 시간 활성화", "가족 단위", "안정적 수요"],
        AreaType.RESIDENTIAL,
    ),
    AreaType.TOURIST: _profile(
        AreaType.TOURIST.value, None,
        (120000, 5000, 25000, 90000), (10, 25, 35, 25, 5), (12, 30, 25, 20, 13), (45, 55),
        ["13-17시"], ["주말/휴일 집중", "계절 편차", "관광객 중심"],
        AreaType.TOURIST,
    ),
    AreaType.NIGHTLIFE: _profile(
        AreaType.NIGHTLIFE.value, None,
        (70000, 10000, 15000, 45000), (5, 10, 15, 40, 30), (5, 40, 35, 15, 5), (55, 45),
        ["20-24시"], ["야간 특화", "주류업 활성화", "주말 집중"],
        AreaType.NIGHTLIFE,
    ),
    AreaType.MIXED: _profile(
        AreaType.MIXED.value, None,
        (90000, 25000, 30000, 35000), (12, 23, 22, 30, 13), (10, 28, 30, 20, 12), (48, 52),
        ["12-14시", "18-21시"], ["주거·상업 혼재", "다양한 연령대", "시간대별 고른 수요"],
        AreaType.MIXED,
    ),
})

# Daily visitors per registered store, used to turn a store count into traffic
STORE_TO_POPULATION_RATIO = MappingProxyType({
    AreaType.STATION: 150,
    AreaType.UNIVERSITY: 120,
    AreaType.OFFICE: 100,
    AreaType.RESIDENTIAL: 80,
    AreaType.TOURIST: 200,
    AreaType.NIGHTLIFE: 180,
    AreaType.MIXED: 130,
})

# Blend weights for curated profiles: static baseline vs live store-derived value
STATIC_WEIGHT = 0.7
LIVE_WEIGHT = 0.3
# Share of a store-derived estimate treated as floating population
LIVE_FLOATING_SHARE = 0.4
# Segment split when a live estimate replaces a pattern profile
LIVE_SEGMENT_SPLIT = MappingProxyType({"residential": 0.2, "working": 0.4, "floating": 0.4})

AGE_GROUP_LABELS = MappingProxyType({
    "teens": "10대",
    "twenties": "20대",
    "thirties": "30대",
    "forties": "40대",
    "fifty_plus": "50대 이상",
})


def _fit(ages, gender, area_types, slots, note):
    return BusinessFit(
        preferred_age_groups=tuple(ages),
        preferred_gender=gender,
        preferred_area_types=tuple(area_types),
        preferred_time_slots=tuple(slots),
        note=note,
    )


_A = AreaType
_G = GenderPreference

BUSINESS_TARGET_FIT = MappingProxyType({
    "카페": _fit(["twenties", "thirties"], _G.FEMALE, [_A.UNIVERSITY, _A.OFFICE, _A.MIXED],
                ["afternoon", "evening"], "20-30대 여성, 오후 시간대 유동인구 중요"),
    "음식점": _fit(["thirties", "forties"], _G.ANY, [_A.STATION, _A.OFFICE, _A.RESIDENTIAL],
                 ["lunch", "evening"], "점심/저녁 피크타임, 직장인+가족 수요"),
    "편의점": _fit(["twenties", "thirties"], _G.ANY, [_A.STATION, _A.RESIDENTIAL, _A.UNIVERSITY],
                 ["morning", "night"], "24시간 수요, 출퇴근/야간 수요 중요"),
    "미용실": _fit(["twenties", "thirties", "forties"], _G.FEMALE, [_A.RESIDENTIAL, _A.STATION],
                 ["afternoon", "evening"], "여성 비율, 주거지 접근성 중요"),
    "치킨": _fit(["twenties", "thirties"], _G.ANY, [_A.RESIDENTIAL, _A.UNIVERSITY],
                ["evening", "night"], "야간 배달 수요, 주거지 인접 유리"),
    "호프": _fit(["twenties", "thirties"], _G.MALE, [_A.NIGHTLIFE, _A.STATION, _A.OFFICE],
                ["evening", "night"], "야간 수요, 직장인/젊은층 밀집 지역"),
    "분식": _fit(["teens", "twenties"], _G.ANY, [_A.UNIVERSITY, _A.STATION],
                ["lunch", "afternoon"], "학생/젊은층, 저가 메뉴 선호 지역"),
    "베이커리": _fit(["twenties", "thirties", "forties"], _G.FEMALE, [_A.STATION, _A.RESIDENTIAL, _A.MIXED],
                  ["morning", "afternoon"], "아침/오후 수요, 여성 비율 중요"),
    "무인매장": _fit(["twenties", "thirties"], _G.ANY, [_A.RESIDENTIAL, _A.STATION],
                  ["night"], "야간/새벽 수요, 주거지 인접 유리"),
    "스터디카페": _fit(["teens", "twenties"], _G.ANY, [_A.UNIVERSITY, _A.RESIDENTIAL],
                   ["afternoon", "evening", "night"], "학생 밀집, 시험 시즌 고려"),
    "네일샵": _fit(["twenties", "thirties"], _G.FEMALE, [_A.STATION, _A.RESIDENTIAL, _A.MIXED],
                 ["afternoon", "evening"], "여성 비율 높을수록 유리"),
    "반려동물": _fit(["thirties", "forties"], _G.ANY, [_A.RESIDENTIAL],
                  ["afternoon", "evening"], "반려인 밀집 주거지, 주말 수요"),
})

# ─── Nearby facilities ───────────────────────────────────────────────────────

BUS_STOP = "버스정류장"

FACILITY_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("지하철역", "SW8"),
    (BUS_STOP, "BS8"),
    ("은행", "BK9"),
    ("주차장", "PK6"),
    ("병원", "HP8"),
    ("약국", "PM9"),
    ("편의점", "CS2"),
    ("대형마트", "MT1"),
    ("학교", "SC4"),
    ("공공기관", "PO3"),
)
FACILITY_PAGE_SIZE = 5

# ─── Policy funds ────────────────────────────────────────────────────────────

POLICY_FUNDS = (
    {
        "id": "1",
        "name": "청년창업사관학교",
        "organization": "중소벤처기업부",
        "amount": "최대 1억원 (융자)",
        "type": "복합",
        "deadline": "연중 수시",
        "requirements": ["만 39세 이하", "예비창업자 또는 3년 이내 창업자"],
        "url": "https://start.kosmes.or.kr",
        "description": "창업교육, 멘토링, 사업화 자금을 패키지로 지원",
    },
    {
        "id": "2",
        "name": "소상공인 정책자금",
        "organization": "소상공인시장진흥공단",
        "amount": "최대 7천만원",
        "type": "융자",
        "deadline": "예산 소진시까지",
        "requirements": ["소상공인 (상시근로자 5인 미만)", "사업자등록증 보유"],
        "url": "https://ols.semas.or.kr",
        "description": "저금리 정책자금 융자",
    },
    {
        "id": "3",
        "name": "서울시 청년창업지원",
        "organization": "서울시",
        "amount": "최대 3천만원 (보조금)",
        "type": "보조금",
        "deadline": "2025-03-31",
        "requirements": ["서울 거주 또는 서울 창업", "만 39세 이하"],
        "url": "https://youth.seoul.go.kr",
        "description": "서울시 청년 대상 창업 보조금",
    },
    {
        "id": "4",
        "name": "여성창업경진대회",
        "organization": "중소벤처기업부",
        "amount": "최대 5천만원 (보조금)",
        "type": "보조금",
        "deadline": "2025-06-30",
        "requirements": ["여성 창업자", "사업계획서 제출"],
        "url": "https://www.wbiz.or.kr",
        "description": "여성 창업자 대상 사업화 지원금",
    },
    {
        "id": "5",
        "name": "소상공인 새출발기금",
        "organization": "소상공인시장진흥공단",
        "amount": "채무조정 + 재창업지원",
        "type": "복합",
        "deadline": None,
        "requirements": ["폐업 소상공인", "재창업 의지"],
        "url": "https://newfund.kr",
        "description": "폐업 경험자 재창업 종합 지원",
    },
    {
        "id": "6",
        "name": "기술창업 아이디어 사업화 지원",
        "organization": "창업진흥원",
        "amount": "최대 1억원",
        "type": "보조금",
        "deadline": "2025-04-30",
        "requirements": ["기술 기반 창업", "예비창업자 또는 3년 이내 창업자"],
        "url": "https://www.k-startup.go.kr",
        "description": "기술 기반 스타트업 사업화 자금",
    },
    {
        "id": "7",
        "name": "신사업창업사관학교",
        "organization": "중소벤처기업부",
        "amount": "최대 1억원",
        "type": "복합",
        "deadline": "연중 수시",
        "requirements": ["40세 이상", "퇴직자 또는 경력단절자"],
        "url": "https://newbiz.kosmes.or.kr",
        "description": "중장년 창업 교육 및 자금 지원",
    },
    {
        "id": "8",
        "name": "소상공인 디지털전환 지원",
        "organization": "소상공인시장진흥공단",
        "amount": "최대 500만원 (바우처)",
        "type": "보조금",
        "deadline": None,
        "requirements": ["소상공인", "디지털 전환 필요"],
        "url": "https://www.sbiz.or.kr",
        "description": "스마트 기기, 키오스크 등 디지털 전환 비용 지원",
    },
)

FUNDING_STAGES = ("예비창업", "초기창업", "운영중", "재창업")
FOUNDER_TYPES = ("청년", "중장년", "여성", "장애인", "일반")

GRANT_STARTUP_KEYWORDS = ("창업", "스타트업", "예비창업", "초기창업", "소상공인", "중소기업", "신규사업", "사업화")
GRANT_REGIONS = (
    "서울", "부산", "대구", "인천", "광주", "대전", "울산", "세종",
    "경기", "강원", "충북", "충남", "전북", "전남", "경북", "경남", "제주",
)

# ─── Business trends ─────────────────────────────────────────────────────────

TREND_SNAPSHOT = MappingProxyType({
    "period": "2024년 4분기",
    "data_source": "소상공인시장진흥공단, 통계청 전국사업체조사",
    "rising": (
        {"name": "무인매장 (아이스크림/세탁/편의점)", "growth_rate": 28.4, "count": 21500, "note": "2024년 1~3분기 신규 창업 기준"},
        {"name": "반려동물 서비스 (미용/호텔/용품)", "growth_rate": 19.2, "count": 14800, "note": "전년 동기 대비"},
        {"name": "건강식/샐러드 전문점", "growth_rate": 15.7, "count": 6200, "note": "전년 동기 대비"},
        {"name": "스터디카페/공유오피스", "growth_rate": 12.3, "count": 5100, "note": "전년 동기 대비"},
        {"name": "전기차 충전 서비스", "growth_rate": 45.8, "count": 3200, "note": "인프라 확대 중"},
        {"name": "밀키트/간편식 전문점", "growth_rate": 11.5, "count": 4300, "note": "전년 동기 대비"},
    ),
    "declining": (
        {"name": "일반 커피전문점", "growth_rate": -4.2, "count": 92500, "note": "포화 상태, 폐업률 증가"},
        {"name": "치킨 프랜차이즈", "growth_rate": -6.8, "count": 41200, "note": "경쟁 심화"},
        {"name": "PC방/게임장", "growth_rate": -12.4, "count": 6800, "note": "모바일 게임 대체"},
        {"name": "노래방/코인노래방", "growth_rate": -15.2, "count": 9200, "note": "여가 패턴 변화"},
        {"name": "호프/주점", "growth_rate": -8.7, "count": 29800, "note": "음주 문화 변화"},
    ),
    "highlights": (
        "무인매장: 인건비 절감과 24시간 운영으로 가장 빠르게 성장 중",
        "반려동물: 반려인구 1,500만 시대, 펫코노미 시장 규모 10조원 돌파",
        "건강식: MZ세대 중심 건강 트렌드 확산, 단백질 식품 수요 급증",
        "커피전문점: 전국 10만개 이상 포화 상태, 특화 전략 없이는 생존 어려움",
        "주점류: 혼술 문화 확산되나 배달/HMR로 대체, 오프라인 매장 감소세",
    ),
})

REGIONAL_TRENDS = MappingProxyType({
    "서울": {
        "trends": (
            "강남/서초: 프리미엄 펫샵, 고급 레스토랑 성장",
            "마포/홍대: 소규모 개성 있는 F&B 업종 인기",
            "성동/성수: 카페/갤러리 복합 공간 트렌드",
        ),
        "top_industries": ("음식점", "소매업", "전문서비스업"),
    },
    "부산": {
        "trends": (
            "해운대/광안리: 관광객 대상 해산물 맛집 성장",
            "서면: 젊은 층 타겟 프랜차이즈 경쟁 심화",
            "감천/영도: 로컬 관광 콘텐츠 연계 창업 증가",
        ),
        "top_industries": ("음식점", "숙박업", "소매업"),
    },
    "경기": {
        "trends": (
            "판교/분당: IT종사자 대상 점심 특화 음식점",
            "수원/용인: 키즈 관련 업종 급성장",
            "파주/김포: 물류센터 인근 편의시설 수요 증가",
        ),
        "top_industries": ("음식점", "소매업", "생활서비스"),
    },
    "대전": {
        "trends": (
            "유성구: 연구단지 직장인 점심 식당 수요",
            "중구/서구: 대학가 배달 전문점 성장",
        ),
        "top_industries": ("음식점", "교육서비스", "소매업"),
    },
    "인천": {
        "trends": (
            "송도: 신도시 가족 타겟 업종 성장",
            "부평/구월: 전통 상권 리뉴얼 트렌드",
        ),
        "top_industries": ("음식점", "소매업", "물류서비스"),
    },
    "제주": {
        "trends": (
            "관광객 감소로 숙박/음식업 조정기",
            "로컬 농산물 직거래 플랫폼 성장",
            "장기체류 '한달살기' 대상 서비스 확대",
        ),
        "top_industries": ("숙박업", "음식점", "소매업"),
    },
})

# Budget in 원; picks for budgets below each ceiling
BUDGET_PICKS: tuple[tuple[float, tuple[str, ...]], ...] = (
    (50_000_000, (
        "무인 아이스크림 매장 (3천~5천만원)",
        "배달 전문점 (3천~5천만원)",
        "1인 반찬가게 (2천~4천만원)",
    )),
    (100_000_000, (
        "반려동물 미용샵 (5천~8천만원)",
        "스터디카페 (7천~1억원)",
        "건강식 전문점 (5천~8천만원)",
    )),
    (float("inf"), (
        "무인 빨래방 (1억~1.5억원)",
        "키즈카페 (1억~2억원)",
        "프리미엄 펫샵 (1억~1.5억원)",
    )),
)

DENSE_DISTRICT_STORES = 1000
