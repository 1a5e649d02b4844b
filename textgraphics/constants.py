STANDARD_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".tif", ".tiff"}
HEIF_EXTENSIONS = {".heic", ".heif", ".hif"}
SUPPORTED_EXTENSIONS = STANDARD_EXTENSIONS | HEIF_EXTENSIONS

AUTO = "auto"

NARROW_CHAR_WIDTH = 0.5
WIDE_CHAR_WIDTH = 1.0

TEXT_ALIGN_LEFT = "left"
TEXT_ALIGN_CENTER = "center"
TEXT_ALIGN_RIGHT = "right"
VALID_TEXT_ALIGNS = {TEXT_ALIGN_LEFT, TEXT_ALIGN_CENTER, TEXT_ALIGN_RIGHT}

DEFAULT_FONT_SIZE = 12

# 行高视觉修正：偶数行减 2px，奇数行减 4px
HEIGHT_CORRECTION_EVEN = 2
HEIGHT_CORRECTION_ODD = 4

# 圆角折线化时每个四分之一圆弧的最少分段数
ARC_MIN_SEGMENTS = 8

OUTPUT_FORMATS = {"png", "webp"}
