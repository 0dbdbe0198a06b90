from linkalias.services.save_service import SaveService
from linkalias.services.redirect_resolver import RedirectResolver


__all__ = ['SaveService', 'RedirectResolver']
