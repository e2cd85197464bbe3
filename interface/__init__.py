# Terminal front ends for the App.
