"""Rescue applet constants: AID, instructions, PHY TLV tags and bitmasks."""

RESCUE_AID = bytes.fromhex("A0583FC19B7E4F21")

# Instructions (CLA 80)
INS_WRITE = 0x1C
INS_SECURE = 0x1D
INS_READ = 0x1E

# READ P1/P2 selectors
READ_PHY = (0x01, 0x01)
READ_FLASH = (0x02, 0x00)
READ_SECURE = (0x03, 0x00)

# WRITE P1
WRITE_PHY = 0x01

# PHY config tags
TAG_VIDPID = 0x00
TAG_LED_GPIO = 0x04
TAG_LED_BRIGHTNESS = 0x05
TAG_OPTS = 0x06
TAG_UP_BTN = 0x08
TAG_USB_PRODUCT = 0x09
TAG_CURVES = 0x0A
TAG_LED_DRIVER = 0x0C

# TAG_OPTS bits. DISABLE_POWER_RESET is inverted with respect to the
# power_cycle_on_reset setting.
OPT_LED_DIMMABLE = 0x02
OPT_DISABLE_POWER_RESET = 0x04
OPT_LED_STEADY = 0x08

# TAG_CURVES bits
CURVE_SECP256K1 = 0x08

# USB product string, NUL terminator included
MAX_PRODUCT_NAME = 32

PHY_TAG_NAMES: dict[int, str] = {
    TAG_VIDPID: "VID/PID",
    TAG_LED_GPIO: "LED GPIO",
    TAG_LED_BRIGHTNESS: "LED Brightness",
    TAG_OPTS: "Options",
    TAG_UP_BTN: "Presence Button Timeout",
    TAG_USB_PRODUCT: "USB Product",
    TAG_CURVES: "Curves",
    TAG_LED_DRIVER: "LED Driver",
}
