"""photo-date-sync：同步影像的建立、修改與拍攝時間。"""

__version__ = "0.1.0"
