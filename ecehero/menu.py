"""Main menu and rules screen."""

from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

_CLEAR = "\x1b[2J\x1b[H"
_WHITE = "\x1b[97m"
_YELLOW = "\x1b[93m"
_CYAN = "\x1b[36m"
_LIGHT_CYAN = "\x1b[96m"
_LIGHT_GREEN = "\x1b[92m"
_LIGHT_RED = "\x1b[91m"
_MAGENTA = "\x1b[35m"


def menu_text() -> str:
    """The main menu, ending with the choice prompt."""
    return "".join(
        [
            _CYAN,
            "\n\t\tECE HEROES\n\n",
            _LIGHT_CYAN,
            "   1. Lire les regles\n",
            _LIGHT_GREEN,
            "   2. Commencer une nouvelle partie\n",
            _LIGHT_RED,
            "   3. Reprendre la sauvegarde\n",
            _MAGENTA,
            "   4. Quitter\n\n",
            _WHITE,
            "   Votre choix : ",
        ]
    )


def rules_text() -> str:
    """The rules screen, ending with the 'press a key' prompt."""
    return "".join(
        [
            _YELLOW,
            "\n\t--- REGLES DU JEU ---\n\n",
            _MAGENTA,
            " 1. COMMANDES :\n",
            "    [ Z Q S D ] : Se deplacer dans le plateau\n",
            "    [ ESPACE ]  : Selectionner / Echanger un symbole\n",
            "    [ O ]       : Quitter le niveau en cours\n\n",
            _CYAN,
            " 2. BUT DU JEU :\n",
            "    Alignez 3 symboles identiques (ou plus) pour remplir le contrat.\n",
            "    Attention au temps et au nombre de coups limites !\n\n",
            _LIGHT_CYAN,
            " 3. FORMES SPECIALES :\n",
            "    [ 4/5 Alignes ]     -> Cree un BONUS (= ou H) selon le sens.\n",
            "    [ 3 Bonus Alignes ] -> Les activent et ajoute une vie au joueur.\n",
            "    [ 6 Alignes ]       -> Detruit tous les items de cette couleur.\n",
            "    [ Croix 3x3 ]       -> Detruit tous les items de cette couleur.\n",
            "    [ Carre de 4x4 ]    -> Explosion de la zone 4x4.\n\n",
            _LIGHT_GREEN,
            " 4. ITEMS BONUS :\n",
            "    Symbole '=' : Detruit toute sa ligne (si aligne).\n",
            "    Symbole 'H' : Detruit toute sa colonne (si aligne).\n\n",
            _LIGHT_RED,
            " 5. PROGRESSION :\n",
            "    Echec du niveau = Perte d'une vie.\n",
            "    La progression est sauvegardee entre chaque niveau.\n\n",
            _WHITE,
            " Appuyez sur une touche pour revenir au menu...",
        ]
    )


def show_menu(read_key: Callable[[], str], out: Optional[TextIO] = None) -> int:
    """Show the menu, read one key and return it as a digit value."""
    out = out or sys.stdout
    out.write(_CLEAR)
    out.write(menu_text())
    out.flush()
    key = read_key()
    choice = ord(key[0]) - ord("0") if key else -1
    out.write(f"{choice}\n")
    out.flush()
    return choice


def show_rules(read_key: Callable[[], str], out: Optional[TextIO] = None) -> None:
    """Show the rules and wait for a key."""
    out = out or sys.stdout
    out.write(_CLEAR)
    out.write(rules_text())
    out.flush()
    read_key()