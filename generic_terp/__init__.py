import logging

from chip8.interpreter import Chip8,SCREEN_WIDTH,SCREEN_HEIGHT
from chip8.rom import Rom

SETTINGS = {'scale': 10,
            'timer_frequency': 60,       # Timer ticks (and frames) per second
            'instructions_per_tick': 10, # Instructions run between timer ticks
            'foreground_color': (255,255,255),
            'background_color': (0,0,0),
            'tone_frequency': 440}

# Standard layout: the 4x4 block 1234/QWER/ASDF/ZXCV stands in for the hex keypad
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
KEYMAP = {'1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
          'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
          'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
          'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF}

class ConfigException(Exception):
    pass

def build_settings(**overrides):
    """ Return a copy of SETTINGS with any non-None overrides applied. Raises ConfigException on bad values """
    settings = dict(SETTINGS)
    for key,val in overrides.items():
        if key not in SETTINGS:
            raise ConfigException('Unknown setting %s' % key)
        if val is not None:
            settings[key] = val

    for key in ('scale','timer_frequency','instructions_per_tick'):
        try:
            settings[key] = int(settings[key])
        except (TypeError,ValueError):
            raise ConfigException('Setting %s must be a whole number, not %r' % (key,settings[key]))
        if settings[key] < 1:
            raise ConfigException('Setting %s must be at least 1' % key)
    return settings

def key_for_char(ch):
    """ Return the keypad index for the given keyboard character, or None if it is not mapped """
    if not ch:
        return None
    return KEYMAP.get(ch.lower())

def load_machine(path,speaker=None):
    """ Create a machine with the ROM at path loaded. Returns (machine, rom) """
    rom = Rom.from_path(path)
    machine = Chip8(speaker=speaker)
    rom.load_into(machine)
    return machine,rom

def restart_machine(machine,rom):
    """ Reset the machine and load the ROM again """
    machine.reset()
    rom.load_into(machine)

def render_text(framebuffer,on='#',off=' '):
    """ Return the framebuffer as a list of strings, one per row """
    lines = []
    for row in range(0,SCREEN_HEIGHT):
        cells = framebuffer[row*SCREEN_WIDTH:(row+1)*SCREEN_WIDTH]
        lines.append(''.join([on if cell else off for cell in cells]))
    return lines

class Tracer(object):
    """ Records every executed instruction to a file through the interpreter's logger """
    FORMAT = '%(asctime)s %(message)s'

    def __init__(self,path):
        self.path = path
        self.handler = logging.FileHandler(path,mode='w')
        self.handler.setFormatter(logging.Formatter(Tracer.FORMAT))
        self.handler.setLevel(logging.DEBUG)
        self.logger = logging.getLogger('chip8.interpreter')
        self.previous_level = self.logger.level
        self.previous_propagate = self.logger.propagate

    def start(self):
        """ Trace to the file only. Instructions are not passed on to the console handlers """
        self.previous_level = self.logger.level
        self.previous_propagate = self.logger.propagate
        self.logger.addHandler(self.handler)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

    def stop(self):
        self.logger.removeHandler(self.handler)
        self.logger.setLevel(self.previous_level)
        self.logger.propagate = self.previous_propagate
        self.handler.close()
