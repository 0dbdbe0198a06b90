from linkalias.models.short_link_model import ShortLinkModel


__all__ = ['ShortLinkModel']
