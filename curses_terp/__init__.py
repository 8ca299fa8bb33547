import curses

from chip8.interpreter import SCREEN_WIDTH,SCREEN_HEIGHT
from generic_terp import key_for_char

# Terminal cells are roughly twice as tall as wide, so two pixel rows share one cell
UPPER_HALF = '▀'
LOWER_HALF = '▄'
FULL_BLOCK = '█'

# Curses only reports key presses, so a pressed key is held for this many timer ticks
KEY_HOLD_TICKS = 6

def half_block_lines(framebuffer):
    """ Return the framebuffer as SCREEN_HEIGHT/2 strings using half-block characters """
    lines = []
    for row in range(0,SCREEN_HEIGHT,2):
        top = framebuffer[row*SCREEN_WIDTH:(row+1)*SCREEN_WIDTH]
        bottom = framebuffer[(row+1)*SCREEN_WIDTH:(row+2)*SCREEN_WIDTH]
        chars = []
        for upper,lower in zip(top,bottom):
            if upper and lower:
                chars.append(FULL_BLOCK)
            elif upper:
                chars.append(UPPER_HALF)
            elif lower:
                chars.append(LOWER_HALF)
            else:
                chars.append(' ')
        lines.append(''.join(chars))
    return lines

class CursesScreen(object):
    """ Draws the framebuffer into a curses window """
    def __init__(self,window):
        self.window = window

    def draw(self,framebuffer):
        for y,line in enumerate(half_block_lines(framebuffer)):
            self.window.addstr(y,0,line)
        self.window.refresh()

class CursesKeypad(object):
    """ Maps terminal key presses onto the keypad, releasing each key after KEY_HOLD_TICKS timer ticks """
    def __init__(self,machine,hold_ticks=KEY_HOLD_TICKS):
        self.machine = machine
        self.hold_ticks = hold_ticks
        self.held = {}

    def char_pressed(self,ch):
        """ Return True if the character was a keypad key """
        key = key_for_char(ch)
        if key is None:
            return False
        self.machine.keypress(key,True)
        self.held[key] = self.hold_ticks
        return True

    def tick(self):
        for key in list(self.held):
            self.held[key] -= 1
            if self.held[key] <= 0:
                del self.held[key]
                self.machine.keypress(key,False)
