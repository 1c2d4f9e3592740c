"""Navigator EdgeSession Meta information.
   Navigator EdgeSession keeps signed, cookie-addressed session state
   for stateless request handlers.
"""
__title__ = 'navigator_edgesession'
__description__ = (
   'Navigator EdgeSession keeps signed, cookie-addressed session state '
   'in an external key-value store.'
)
__version__ = '0.1.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
