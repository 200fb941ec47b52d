"""
iPhone to Pixel (i2p) - Make iPhone media Pixel-gallery friendly

Converts photos/videos exported from iPhone or Google Takeout with:
- Bit-for-bit photo copies (HEIC/HDR fidelity preserved)
- Video remux to MP4 without re-encoding (HDR/Dolby Vision preserved)
- Full H.264 transcode for legacy MPEG files
- Capture date recovery from embedded tags and Takeout JSON sidecars
"""

__version__ = "0.1.0"
__package_name__ = "iphone-to-pixel"
__short_name__ = "i2p"
