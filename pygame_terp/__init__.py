import array
import logging

import pygame

from chip8.interpreter import Speaker,SCREEN_WIDTH,SCREEN_HEIGHT
from generic_terp import key_for_char

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
TONE_DURATION = 0.1 # Seconds
TONE_VOLUME = 4096

class PygameUI(object):
    """ Acts as an interface to our pygame UI.

        Draws the machine's framebuffer scaled up into an OS window, and passes key down/up
        events for the mapped keys through to the machine's keypad.

        The main loop needs to call tick() on this object regularly. It will return True if
        processing should continue, False if a UI-level event cancels. Pause and restart
        requests are recorded for the main loop to pick up.
    """

    def __init__(self,settings,title='CHIP-8'):
        """ Initialize the UI. This will open an OS window """
        pygame.init()
        self.scale = settings['scale']
        self.foreground_color = settings['foreground_color']
        self.background_color = settings['background_color']
        self.screen = pygame.display.set_mode((SCREEN_WIDTH*self.scale,SCREEN_HEIGHT*self.scale))
        self.title = title
        pygame.display.set_caption(title)
        self.pause_requested = False
        self.restart_requested = False

    def tick(self,machine):
        """ Run tick of game loop. Return False if program should quit, True if keep running """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_p:
                self.pause_requested = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_F5:
                self.restart_requested = True
            elif event.type in (pygame.KEYDOWN,pygame.KEYUP):
                key = key_for_char(pygame.key.name(event.key))
                if key is not None:
                    machine.keypress(key,event.type == pygame.KEYDOWN)

        return True

    def draw(self,framebuffer):
        """ Redraw the window from the framebuffer """
        self.screen.fill(self.background_color)
        for idx,lit in enumerate(framebuffer):
            if lit:
                x = (idx % SCREEN_WIDTH) * self.scale
                y = (idx // SCREEN_WIDTH) * self.scale
                self.screen.fill(self.foreground_color,pygame.Rect(x,y,self.scale,self.scale))
        pygame.display.flip()

    def set_title(self,title):
        pygame.display.set_caption(title)

    def show_paused(self,paused):
        """ Mark the window title while the machine is paused """
        if paused:
            self.set_title('%s [PAUSED]' % self.title)
        else:
            self.set_title(self.title)

    def close(self):
        pygame.quit()

def square_wave(frequency,sample_rate=SAMPLE_RATE,duration=TONE_DURATION,channels=1,volume=TONE_VOLUME):
    """ Return signed 16-bit samples for a square wave """
    samples = array.array('h')
    period = max(2,int(sample_rate / frequency))
    for i in range(0,int(sample_rate * duration)):
        val = volume if (i % period) < period // 2 else -volume
        for channel in range(0,channels):
            samples.append(val)
    return samples

class PygameSpeaker(Speaker):
    """ Plays a short tone through the pygame mixer. Silent if no audio device is available """
    def __init__(self,settings):
        self.sound = None
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE,size=-16,channels=1)
            sample_rate,size,channels = pygame.mixer.get_init()
            self.sound = pygame.mixer.Sound(buffer=square_wave(settings['tone_frequency'],
                                                               sample_rate=sample_rate,
                                                               channels=channels))
        except pygame.error as e:
            logger.warning('Sound disabled: %s', e)

    def beep(self):
        if self.sound:
            self.sound.play()
